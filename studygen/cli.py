"""
StudyGen CLI - offline flashcard & MCQ generator
Usage: studygen input.txt [--flashcards=N] [--mcqs=N] [--difficulty=LEVEL] [--bloom=LEVEL] [--seed=N]

Prints the generated content as JSON on stdout. Logs go to stderr.
"""
import json
import logging
import sys
from pathlib import Path

from studygen.content import ContentAssembler
from studygen.errors import StudyGenError
from studygen.ingest import normalize_extracted_text
from studygen.taxonomy import BloomLevel, Difficulty
from studygen.utils import get_logger

logger = get_logger()

USAGE = 'Usage: studygen <input_file.txt> [--flashcards=N] [--mcqs=N] [--difficulty=LEVEL] [--bloom=LEVEL] [--seed=N]'

_INT_OPTIONS = {'--flashcards': 'flashcard_count', '--mcqs': 'mcq_count', '--seed': 'seed'}
_STR_OPTIONS = {'--difficulty': 'difficulty', '--bloom': 'bloom_level'}


def _route_logs_to_stderr():
    """Point console handlers at stderr; returns the previous streams for restoring."""
    # stdout carries the JSON document only
    previous = []
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            previous.append((handler, handler.setStream(sys.stderr)))
    return previous


def _restore_log_streams(previous):
    for handler, stream in previous:
        if stream is not None:
            handler.setStream(stream)


def parse_args(argv):
    """Parse ``argv`` (without the program name) into generation options.

    Raises:
        ValueError: On a missing input file argument or a malformed option
    """
    if not argv:
        raise ValueError('missing input file')

    options = {
        'input_file': argv[0],
        'flashcard_count': 5,
        'mcq_count': 3,
        'difficulty': Difficulty.BEGINNER.value,
        'bloom_level': BloomLevel.REMEMBER.value,
        'seed': None,
    }
    for arg in argv[1:]:
        key, sep, value = arg.partition('=')
        if not sep:
            raise ValueError(f'unrecognized argument: {arg}')
        if key in _INT_OPTIONS:
            try:
                options[_INT_OPTIONS[key]] = int(value)
            except ValueError:
                raise ValueError(f'{key} expects an integer, got {value!r}')
        elif key in _STR_OPTIONS:
            options[_STR_OPTIONS[key]] = value
        else:
            raise ValueError(f'unrecognized option: {key}')
    return options


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    previous = _route_logs_to_stderr()
    try:
        return _run(argv)
    finally:
        _restore_log_streams(previous)


def _run(argv):
    try:
        options = parse_args(argv)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    input_path = Path(options['input_file'])
    if not input_path.exists():
        logger.error('Input file not found', extra={'input_file': str(input_path)})
        return 1

    with open(input_path, 'r', encoding='utf-8') as f:
        raw_text = f.read()

    try:
        extracted = normalize_extracted_text({'content': raw_text, 'filename': input_path.name})
        content = ContentAssembler().assemble(
            extracted.content,
            options['flashcard_count'],
            options['mcq_count'],
            options['difficulty'],
            options['bloom_level'],
            seed=options['seed'],
        )
    except StudyGenError as e:
        logger.error('Generation failed', extra={'error_type': type(e).__name__, 'details': str(e)})
        print(f'Error: {e}', file=sys.stderr)
        return 1

    print(json.dumps(content.model_dump(mode='json'), indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
