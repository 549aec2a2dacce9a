import random

import pytest

from studygen.concepts import Concept, extract_concepts
from studygen.errors import InvalidParameterError
from studygen.quiz import MCQGenerator, generate_mcqs, lead_words, shuffle_options, synthesize_distractors
from studygen.quiz.distractors import DEFAULT_TYPE_DISTRACTORS
from studygen.taxonomy import BloomLevel, ConceptType, Difficulty


def make_concept(text, concept_type=ConceptType.GENERAL):
    return Concept(id='concept-0', text=text, type=concept_type, source_excerpt=text, importance=0.7)


def test_single_string_concept_yields_valid_mcq():
    source = 'Insulin regulates blood glucose levels.'
    mcqs = MCQGenerator(random.Random(42)).generate([source], 1, Difficulty.BEGINNER, BloomLevel.REMEMBER)
    assert len(mcqs) == 1
    mcq = mcqs[0]
    assert len(mcq.options) == 4
    assert len(set(mcq.options)) == 4
    assert mcq.options.count(source) == 1
    assert mcq.options[mcq.correct_answer_index] == source
    assert mcq.correct_option == source


def test_correct_index_tracks_shuffle(sample_text):
    concepts = extract_concepts(sample_text)
    for seed in range(20):
        mcqs = generate_mcqs(concepts, 3, 'beginner', 'remember', seed=seed)
        for mcq, concept in zip(mcqs, concepts):
            assert 0 <= mcq.correct_answer_index <= 3
            assert mcq.options[mcq.correct_answer_index] == concept.text[:60]


def test_mcq_fields(three_concept_text):
    concepts = extract_concepts(three_concept_text)
    mcq = generate_mcqs(concepts, 1, 'advanced', 'analyze', seed=8)[0]
    assert mcq.question.endswith('?')
    assert mcq.explanation.startswith('Based on: ')
    assert mcq.explanation.endswith('...')
    assert 'mcq' in mcq.tags
    assert mcq.tags[:3] == ['auto-generated', 'advanced', 'analyze']
    assert mcq.id.startswith('mcq-')


def test_empty_concepts_return_empty_list():
    assert generate_mcqs([], 3, 'beginner', 'remember') == []
    assert generate_mcqs(['   '], 3, 'beginner', 'remember') == []


def test_zero_count_returns_empty(sample_text):
    assert generate_mcqs(extract_concepts(sample_text), 0, 'beginner', 'remember') == []


def test_seeded_generation_is_reproducible(sample_text):
    concepts = extract_concepts(sample_text)
    assert generate_mcqs(concepts, 3, 'beginner', 'apply', seed=5) == generate_mcqs(concepts, 3, 'beginner', 'apply', seed=5)


def test_invalid_bloom_level(sample_text):
    with pytest.raises(InvalidParameterError):
        generate_mcqs(extract_concepts(sample_text), 1, 'beginner', 'memorize')


def test_shuffle_options_returns_permutation():
    options = ['a', 'b', 'c', 'd']
    shuffled = shuffle_options(options, random.Random(0))
    assert sorted(shuffled) == options
    assert options == ['a', 'b', 'c', 'd']


def test_lead_words():
    assert lead_words('Insulin regulates blood glucose.') == 'Insulin regulates'
    assert lead_words('Insulin.') == 'Insulin'
    assert lead_words('') == 'this topic'


def test_templated_distractors():
    concept = make_concept('Insulin regulates blood glucose levels.')
    distractors = synthesize_distractors(concept, concept.text)
    assert distractors == [
        'Alternative perspective on Insulin regulates',
        'Common misconception about Insulin regulates',
        'Historical context of Insulin regulates',
    ]


def test_colliding_distractor_is_replaced():
    concept = make_concept('Insulin regulates blood glucose levels.')
    distractors = synthesize_distractors(concept, 'Common misconception about Insulin regulates')
    assert distractors == [
        'Alternative perspective on Insulin regulates',
        'Historical context of Insulin regulates',
        DEFAULT_TYPE_DISTRACTORS[0],
    ]


def test_type_distractors_used_for_definitions():
    concept = make_concept('Osmosis is diffusion of water.', ConceptType.DEFINITION)
    distractors = synthesize_distractors(concept, 'Historical context of Osmosis is')
    assert distractors[-1] == 'A process that occurs in different circumstances'


@pytest.mark.parametrize('count', ['2', 2.0, None, False])
def test_non_integer_count_is_rejected(sample_text, count):
    with pytest.raises(InvalidParameterError):
        generate_mcqs(extract_concepts(sample_text), count, 'beginner', 'remember')
