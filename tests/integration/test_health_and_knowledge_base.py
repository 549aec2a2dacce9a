import pytest

from tests.fixtures.sample_data import upload_record


@pytest.mark.integration
def test_health_endpoint(client):
    r = client.get('/health')
    assert r.status_code == 200
    data = r.json()
    assert data.get('status') == 'ok'
    assert data.get('service') == 'studygen'
    assert 'timestamp' in data


@pytest.mark.integration
def test_request_id_is_echoed(client):
    r = client.get('/health', headers={'X-Request-ID': 'trace-123'})
    assert r.headers.get('x-request-id') == 'trace-123'


@pytest.mark.integration
def test_request_id_is_generated(client):
    r = client.get('/health')
    assert r.headers.get('x-request-id')


@pytest.mark.integration
def test_knowledge_base_crud(client):
    r = client.post('/knowledge-base', json={**upload_record(), 'title': 'Insulin notes'})
    assert r.status_code == 201
    body = r.json()
    assert body['success'] is True
    entry = body['entry']
    assert entry['title'] == 'Insulin notes'
    assert entry['source']['filename'] == 'biology-notes.txt'
    assert entry['source']['source_type'] == 'text'
    assert '&amp;' not in entry['source']['content']

    r = client.get('/knowledge-base')
    assert r.status_code == 200
    assert [e['id'] for e in r.json()['entries']] == [entry['id']]

    r = client.get(f"/knowledge-base/{entry['id']}")
    assert r.status_code == 200
    assert r.json()['entry'] == entry

    r = client.delete(f"/knowledge-base/{entry['id']}")
    assert r.status_code == 200
    assert r.json()['id'] == entry['id']

    r = client.get(f"/knowledge-base/{entry['id']}")
    assert r.status_code == 404
    assert r.json()['success'] is False


@pytest.mark.integration
def test_knowledge_base_title_defaults_to_filename(client):
    r = client.post('/knowledge-base', json=upload_record())
    assert r.status_code == 201
    assert r.json()['entry']['title'] == 'biology-notes.txt'


@pytest.mark.integration
def test_knowledge_base_rejects_blank_content(client):
    r = client.post('/knowledge-base', json={'content': ' \r\n\t '})
    assert r.status_code == 400
    assert r.json()['error'] == 'Empty text'


@pytest.mark.integration
def test_knowledge_base_rejects_bad_record(client):
    r = client.post('/knowledge-base', json={'content': 'Cells are small.', 'size': -5})
    assert r.status_code == 400
    body = r.json()
    assert body['success'] is False
    assert body['request_id']


@pytest.mark.integration
def test_delete_unknown_entry(client):
    r = client.delete('/knowledge-base/missing')
    assert r.status_code == 404
