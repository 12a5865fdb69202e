import pytest

from docguards.config import TranslatorSettings
from docguards.doc_model import DocumentedMember
from docguards.program_model import InMemoryProgramModel
from docguards.propositions import PropositionSource

PROGRAM = {
    'types': [
        {
            'name': 'com.example.Container',
            'kind': 'interface',
            'methods': [
                {'name': 'isClosed', 'return_type': 'boolean'},
                {'name': 'size', 'return_type': 'int'},
            ],
        },
        {
            'name': 'com.example.Buffer',
            'supertypes': ['com.example.Container'],
            'methods': [
                {'name': 'append', 'parameters': [
                    {'name': 'data', 'type': 'byte[]'},
                    {'name': 'offset', 'type': 'int'},
                    {'name': 'length', 'type': 'int'}]},
                {'name': 'isEmpty', 'return_type': 'boolean'},
                {'name': 'size', 'return_type': 'int'},
                {'name': 'getCapacity', 'return_type': 'int'},
                {'name': 'copyTo', 'parameters': [{'name': 'other', 'type': 'com.example.Buffer'}]},
                {'name': 'write', 'parameters': [{'name': 'out', 'type': 'java.io.OutputStream'}]},
                {'name': 'wrap', 'static': True, 'return_type': 'com.example.Buffer',
                 'parameters': [{'name': 'bytes', 'type': 'byte[]'}]},
                {'name': 'isValidOffset', 'static': True, 'return_type': 'boolean',
                 'parameters': [{'name': 'offset', 'type': 'int'}]},
                {'name': 'isDirectSupported', 'static': True, 'return_type': 'boolean'},
                {'name': 'reset', 'public': False},
            ],
            'fields': [
                {'name': 'readOnly', 'type': 'boolean'},
                {'name': 'limit', 'type': 'int'},
                {'name': 'cursor', 'type': 'int', 'public': False},
            ],
            'constructors': [
                {'parameters': [{'name': 'capacity', 'type': 'int'}]},
            ],
        },
        {
            'name': 'com.example.Task',
            'methods': [
                {'name': 'isDone', 'return_type': 'boolean'},
                {'name': 'isGone', 'return_type': 'java.lang.Boolean'},
                {'name': 'getName', 'return_type': 'java.lang.String'},
            ],
        },
        {
            'name': 'com.example.Scheduler',
            'methods': [
                {'name': 'submit', 'parameters': [{'name': 'task', 'type': 'com.example.Task'}]},
                {'name': 'current', 'return_type': 'com.example.Task'},
            ],
        },
        {
            'name': 'com.example.Range',
            'methods': [
                {'name': 'between', 'return_type': 'boolean', 'parameters': [
                    {'name': 'valueA', 'type': 'int'},
                    {'name': 'valueB', 'type': 'int'}]},
            ],
        },
        {
            'name': 'com.example.Color',
            'kind': 'enum',
            'methods': [{'name': 'isBright', 'return_type': 'boolean'}],
            'constructors': [{'parameters': [{'name': 'rgb', 'type': 'int'}]}],
        },
    ],
}

APPEND = {
    'name': 'append',
    'containing_type': 'com.example.Buffer',
    'parameters': [
        {'name': 'data', 'type': 'byte[]'},
        {'name': 'offset', 'type': 'int'},
        {'name': 'length', 'type': 'int'},
    ],
    'param_tags': [
        {'parameter': 'data', 'comment': 'the bytes to append, must not be null'},
        {'parameter': 'offset', 'comment': 'the start offset in data. Must be positive'},
        {'parameter': 'length', 'comment': 'the number of bytes to write; must be positive'},
    ],
    'throws_tags': [
        {'exception': 'java.lang.NullPointerException', 'comment': 'if data is null'},
        {'exception': 'java.lang.IllegalArgumentException', 'comment': 'if length is negative'},
    ],
}


class ScriptedPropositionSource(PropositionSource):
    """Returns canned propositions keyed by the exact text it is asked to parse."""

    def __init__(self, script=None):
        self.script = script or {}
        self.calls = []

    def parse(self, text, member=None):
        self.calls.append(text)
        return list(self.script.get(text, []))


@pytest.fixture
def program():
    return InMemoryProgramModel.from_dict(PROGRAM)


@pytest.fixture
def settings():
    return TranslatorSettings(proposition_source='pattern')


@pytest.fixture
def append_member():
    return DocumentedMember.model_validate(APPEND)


@pytest.fixture
def constructor_member():
    return DocumentedMember(
        name='Buffer',
        containing_type='com.example.Buffer',
        parameters=[{'name': 'capacity', 'type': 'int'}],
        is_constructor=True,
        param_tags=[{'parameter': 'capacity', 'comment': 'the initial capacity, must be positive'}],
    )


@pytest.fixture
def submit_member():
    return DocumentedMember(
        name='submit',
        containing_type='com.example.Scheduler',
        parameters=[{'name': 'task', 'type': 'com.example.Task'}],
    )


@pytest.fixture
def between_member():
    return DocumentedMember(
        name='between',
        containing_type='com.example.Range',
        parameters=[{'name': 'valueA', 'type': 'int'}, {'name': 'valueB', 'type': 'int'}],
    )
