"""Rewrite modal phrasing so every clause carries an explicit subject.

``@param`` comments are usually elliptical ("must not be null"). Inserting the
parameter name in front of the modal verb gives the parser a clause with a
subject it can report.
"""

# Case-sensitive and order-significant: earlier entries are rewritten first.
MODAL_PATTERNS = [
    'must be',
    'must not be',
    'will be',
    'will not be',
    "can't be",
    'cannot be',
    'should be',
    'should not be',
    "shouldn't be",
    'may not be',
    'Must be',
    'Must not be',
    'Will be',
    'Will not be',
    "Can't be",
    'Cannot be',
    'Should be',
    'Should not be',
    "Shouldn't be",
    'May not be',
]

# Only tried when no modal pattern matched.
VERBLESS_PATTERNS = ['not null']


def normalize(text: str, parameter_name: str) -> str:
    """Insert ``parameter_name`` as the subject of each modal construction.

    A comment holding a parenthesis gets a space separator so the
    parenthetical is not split into a new sentence; otherwise a full stop
    forces a clause boundary.

    >>> normalize('must not be null', 'index')
    '. index must not be null'
    """
    if not text:
        return text
    # any '(' in the comment selects the space, not only a leading one
    separator = ' ' if '(' in text else '. '
    replaced = False
    for pattern in MODAL_PATTERNS:
        if pattern in text:
            text = text.replace(pattern, f"{separator}{parameter_name} {pattern}")
            replaced = True
    if not replaced:
        for pattern in VERBLESS_PATTERNS:
            text = text.replace(pattern, f". {parameter_name} is {pattern}")
    return text
