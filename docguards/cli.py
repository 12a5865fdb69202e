"""Command line entry points.

Usage:
    docguards-translate program.json
    docguards-translate program.json --member append --threshold 3 --source pattern
    docguards-serve --port 8000

``program.json`` holds ``{"types": [...], "members": [...]}``; see
``docguards.program_model`` and ``docguards.doc_model`` for the record layout.
"""
import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .config import configure_logging, load_settings
from .doc_model import DocumentedMember
from .errors import DocGuardsError, ProgramModelError
from .program_model import InMemoryProgramModel
from .translator import build_translator

logger = logging.getLogger(__name__)


def _load_members(path: str):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [DocumentedMember.model_validate(m) for m in data.get('members', [])]
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise ProgramModelError(f"Cannot read documented members from {path}: {e}") from e


def translate_main(argv=None) -> int:
    p = argparse.ArgumentParser(description='Translate documentation comments into guard expressions.')
    p.add_argument('program', help='JSON file with "types" and "members"')
    p.add_argument('--settings', help='JSON settings file')
    p.add_argument('--member', help='only translate members with this name')
    p.add_argument('--threshold', type=int, help='edit distance threshold')
    p.add_argument('--source', choices=['spacy', 'pattern'], help='proposition source')
    p.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    args = p.parse_args(argv)

    try:
        settings = load_settings(args.settings, distance_threshold=args.threshold,
                                 proposition_source=args.source)
        configure_logging('DEBUG' if args.verbose else settings.log_level)
        program = InMemoryProgramModel.from_json_file(args.program)
        members = _load_members(args.program)
    except DocGuardsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.member:
        members = [m for m in members if m.name == args.member]
    logger.info('Translating %d member(s) from %s', len(members), args.program)
    translator = build_translator(program, settings)
    try:
        results = [translator.translate(m).model_dump() for m in members]
    except DocGuardsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(results, indent=2, ensure_ascii=False))
    return 0


def serve_main(argv=None) -> int:
    import uvicorn

    p = argparse.ArgumentParser(description='Serve the docguards HTTP API.')
    p.add_argument('--host', default='127.0.0.1')
    p.add_argument('--port', type=int, default=8000)
    p.add_argument('--reload', action='store_true')
    args = p.parse_args(argv)

    # settings errors are reported before the server starts
    try:
        configure_logging(load_settings().log_level)
    except DocGuardsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    uvicorn.run('docguards.api:create_app', factory=True, host=args.host, port=args.port,
                reload=args.reload)
    return 0


if __name__ == '__main__':
    sys.exit(translate_main())
