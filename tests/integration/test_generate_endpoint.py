import pytest


@pytest.mark.integration
def test_generate_from_text(client, sample_text):
    r = client.post('/education/generate', json={'text': sample_text, 'flashcard_count': 2, 'mcq_count': 3, 'seed': 42})
    assert r.status_code == 200
    body = r.json()
    assert body['success'] is True
    content = body['content']
    assert len(content['flashcards']) == 2
    assert len(content['mcqs']) == 3
    assert content['metadata']['flashcard_count'] == 2
    assert content['metadata']['mcq_count'] == 3
    for mcq in content['mcqs']:
        assert len(mcq['options']) == 4
        assert 0 <= mcq['correct_answer_index'] <= 3


@pytest.mark.integration
def test_generate_defaults(client, sample_text):
    r = client.post('/education/generate', json={'text': sample_text})
    assert r.status_code == 200
    content = r.json()['content']
    # six concepts: five flashcards, one left for MCQs
    assert len(content['flashcards']) == 5
    assert len(content['mcqs']) == 1
    assert content['metadata']['difficulty'] == 'beginner'
    assert content['metadata']['bloom_level'] == 'remember'


@pytest.mark.integration
def test_generate_is_reproducible_with_seed(client, sample_text):
    body = {'text': sample_text, 'flashcard_count': 3, 'mcq_count': 3, 'bloom_level': 'analyze', 'seed': 7}
    first = client.post('/education/generate', json=body).json()['content']
    second = client.post('/education/generate', json=body).json()['content']
    assert first['flashcards'] == second['flashcards']
    assert first['mcqs'] == second['mcqs']


@pytest.mark.integration
def test_generate_echoes_request_id(client, sample_text):
    r = client.post('/education/generate', json={'text': sample_text}, headers={'X-Request-ID': 'req-abc'})
    assert r.json()['request_id'] == 'req-abc'
    assert r.headers.get('x-request-id') == 'req-abc'


@pytest.mark.integration
def test_generate_from_knowledge_base(client, sample_text):
    saved = client.post('/knowledge-base', json={'content': sample_text, 'title': 'Photosynthesis'}).json()['entry']
    r = client.post('/education/generate', json={'knowledge_base_id': saved['id'], 'flashcard_count': 1, 'mcq_count': 1})
    assert r.status_code == 200
    content = r.json()['content']
    assert len(content['flashcards']) == 1
    assert len(content['mcqs']) == 1


@pytest.mark.integration
def test_generate_unknown_knowledge_base_entry(client):
    r = client.post('/education/generate', json={'knowledge_base_id': 'missing'})
    assert r.status_code == 404
    body = r.json()
    assert body['success'] is False
    assert body['error'] == 'Knowledge base entry not found'


@pytest.mark.integration
@pytest.mark.parametrize('body', [{}, {'text': 'Cells are small.', 'knowledge_base_id': 'abc'}])
def test_generate_requires_exactly_one_source(client, body):
    r = client.post('/education/generate', json=body)
    assert r.status_code == 400
    assert r.json()['error'] == 'Invalid source'


@pytest.mark.integration
def test_generate_empty_text(client):
    r = client.post('/education/generate', json={'text': '   '})
    assert r.status_code == 400
    assert r.json()['error'] == 'Empty text'


@pytest.mark.integration
@pytest.mark.parametrize('overrides', [
    {'flashcard_count': 100},
    {'mcq_count': -1},
    {'difficulty': 'expert'},
    {'bloom_level': 'memorize'},
])
def test_generate_invalid_parameters(client, sample_text, overrides):
    r = client.post('/education/generate', json={'text': sample_text, **overrides})
    assert r.status_code == 400
    body = r.json()
    assert body['error'] == 'Invalid parameters'
    assert body['details']


@pytest.mark.integration
def test_generate_no_concepts(client, fragment_text):
    r = client.post('/education/generate', json={'text': fragment_text})
    assert r.status_code == 422
    assert r.json()['error'] == 'No concepts extracted'


@pytest.mark.integration
def test_generate_failure_maps_to_500(client, sample_text, monkeypatch):
    from studygen.errors import GenerationError
    from studygen.quiz import MCQGenerator

    def boom(self, *args, **kwargs):
        raise GenerationError('distractor pool exhausted')

    monkeypatch.setattr(MCQGenerator, 'generate', boom)
    r = client.post('/education/generate', json={'text': sample_text})
    assert r.status_code == 500
    assert r.json()['error'] == 'Content generation failed'
