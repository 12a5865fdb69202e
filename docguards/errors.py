"""Exception types raised by docguards.

Recoverable conditions of the translation core (an unresolvable type, no
subject or predicate match) never raise; these are for bad input and for the
program model contract.
"""


class DocGuardsError(Exception):
    pass


class ConfigurationError(DocGuardsError):
    """Settings file missing, malformed or holding invalid values."""


class ProgramModelError(DocGuardsError):
    """A program description could not be loaded."""


class TypeResolutionError(DocGuardsError):
    def __init__(self, type_name: str):
        super().__init__(f"Cannot resolve type: {type_name}")
        self.type_name = type_name
