import pytest

from studygen.errors import InvalidParameterError
from studygen.ingest import ExtractedText, SourceType, clean_text, normalize_extracted_text
from tests.fixtures.sample_data import upload_record


def test_clean_text_normalizes_line_endings():
    assert clean_text('one\r\ntwo\rthree') == 'one\ntwo\nthree'


def test_clean_text_decodes_entities():
    assert clean_text('salt &amp; pepper &lt;b&gt;') == 'salt & pepper <b>'


def test_clean_text_collapses_whitespace_and_blank_lines():
    assert clean_text('  a   b\t\tc  \n\n\n\n  d  ') == 'a b c\n\nd'


def test_clean_text_removes_control_characters():
    assert clean_text('bell\x07 and null\x00 chars') == 'bell and null chars'


def test_clean_text_rejects_non_strings():
    with pytest.raises(InvalidParameterError):
        clean_text(None)


def test_normalize_plain_string():
    extracted = normalize_extracted_text('  Cells are small.  ')
    assert extracted.content == 'Cells are small.'
    assert extracted.source_type is SourceType.TEXT
    assert extracted.size == len('  Cells are small.  ')
    assert extracted.extracted_at


def test_normalize_upload_record():
    extracted = normalize_extracted_text(upload_record())
    assert extracted.filename == 'biology-notes.txt'
    assert extracted.source_type is SourceType.TEXT
    assert extracted.size == 112
    assert extracted.extracted_at == '2024-03-01T10:00:00+00:00'
    assert extracted.content == (
        'Insulin is a hormone that regulates blood glucose.\n\n'
        'It is made in the pancreas & released after meals.'
    )


def test_normalize_snake_case_record_without_size():
    extracted = normalize_extracted_text({'content': 'Osmosis', 'source_type': 'pdf', 'extracted_at': '2024-01-01'})
    assert extracted.source_type is SourceType.PDF
    assert extracted.size == len('Osmosis')
    assert extracted.extracted_at == '2024-01-01'


def test_normalize_existing_value_recleans_content():
    extracted = normalize_extracted_text(ExtractedText(content='a\r\n\r\n\r\nb', filename='x.txt'))
    assert extracted.content == 'a\n\nb'
    assert extracted.filename == 'x.txt'


@pytest.mark.parametrize('record', [
    42,
    ['content'],
    {'filename': 'missing.txt'},
    {'content': None},
    {'content': 'ok', 'type': 'spreadsheet'},
    {'content': 'ok', 'size': -1},
])
def test_normalize_rejects_bad_records(record):
    with pytest.raises(InvalidParameterError):
        normalize_extracted_text(record)
