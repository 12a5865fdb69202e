import pytest

from docguards.code_elements import ElementKind
from docguards.collector import CodeElementCollector
from docguards.matcher import Matcher, clean_subject, simple_match
from docguards.propositions import PatternPropositionSource


@pytest.fixture
def matcher(program, settings):
    return Matcher(program, CodeElementCollector(program, PatternPropositionSource(), settings))


def _subject(matcher, member, text):
    (subject,) = matcher.match_subject(text, member)
    return subject


# ------------------------------- simple match --------------------------------

@pytest.mark.parametrize('predicate, suffix', [
    ('null', '==null'),
    ('is null', '==null'),
    ('are true', '==true'),
    ('== false', '==false'),
    ('is zero', '==0'),
    ('positive', '>0'),
    ('strictly positive', '>0'),
    ('is negative', '<0'),
    ('strictly negative', '<0'),
    ('is not null', '!=null'),
    ('!= null', '!=null'),
    ('not zero', '!=0'),
    ('is not positive', '<=0'),
    ('not negative', '>=0'),
    ('non-negative', '>=0'),
    ('nonnegative', '>=0'),
    ('is non-positive', '<=0'),
    ('non-null', '!=null'),
    ('nonzero', '!=0'),
    ('is 3', '==3'),
    ('= 3', '==3'),
    ('>= 10', '>=10'),
    ('< -1', '<-1'),
    ('!= 7', '!=7'),
    ('greater than 0', '>0'),
    ('greater than or equal to 2', '>=2'),
    ('less than 5', '<5'),
    ('been set', '!=null'),
    ('instanceof java.io.Serializable', ' instanceof java.io.Serializable'),
])
def test_simple_match_catalogue(predicate, suffix):
    assert simple_match(predicate) == suffix


def test_simple_match_rejects_unknown_and_malformed():
    assert simple_match('empty') is None
    assert simple_match('a valid index') is None
    assert simple_match('99999999999') is None
    assert simple_match('a utf8 name') is None
    assert simple_match('truest') is None


# ------------------------------- subjects ------------------------------------

def test_clean_subject():
    assert clean_subject('either a or b') == 'a or b'
    assert clean_subject('both x and y ') == 'x and y'
    assert clean_subject('either either a') == 'either a'
    assert clean_subject('neither a') == 'neither a'
    assert clean_subject('a or either b') == 'a or either b'


def test_match_subject_by_name(matcher, append_member):
    assert [e.expression for e in matcher.match_subject('offset', append_member)] == ['offset']
    assert [e.kind for e in matcher.match_subject('buffer', append_member)] == [ElementKind.TYPE]
    assert [e.expression for e in matcher.match_subject('size', append_member)] == ['target.size()']


def test_match_subject_tolerates_typos(matcher, append_member):
    assert [e.expression for e in matcher.match_subject('lenght', append_member)] == ['length']


def test_match_subject_uses_mined_identifiers(matcher, append_member):
    assert [e.expression for e in matcher.match_subject('bytes', append_member)] == ['data']


def test_ambiguous_mined_identifier_does_not_match(matcher, append_member):
    assert matcher.match_subject('positive', append_member) == []


def test_match_subject_strips_either(matcher, append_member):
    assert [e.expression for e in matcher.match_subject('either offset', append_member)] == ['offset']


def test_no_subject_match(matcher, append_member):
    assert matcher.match_subject('xylophone', append_member) == []


def test_match_subject_is_idempotent(matcher, append_member):
    first = matcher.match_subject('limit', append_member)
    assert first == matcher.match_subject('limit', append_member)
    assert [e.expression for e in first] == ['target.limit']


def test_match_subject_returns_ties(matcher, between_member):
    found = matcher.match_subject('valu', between_member)
    assert [e.expression for e in found] == ['valueA', 'valueB']


def test_unresolvable_type_matches_nothing(matcher):
    from docguards.doc_model import DocumentedMember
    member = DocumentedMember(name='run', containing_type='com.missing.Gone')
    assert matcher.match_subject('run', member) == []


# ------------------------------- predicates ----------------------------------

def test_negative_parameter(matcher, append_member):
    length = _subject(matcher, append_member, 'length')
    assert matcher.match_predicate(append_member, length, 'is negative', False) == 'length<0'


def test_null_parameter_not_negated(matcher, append_member):
    data = _subject(matcher, append_member, 'data')
    assert matcher.match_predicate(append_member, data, 'null', False) == 'data==null'


def test_instanceof(matcher, append_member):
    data = _subject(matcher, append_member, 'data')
    assert (matcher.match_predicate(append_member, data, 'instanceof java.io.Serializable')
            == 'data instanceof java.io.Serializable')


def test_array_parameter_derived_elements(matcher, append_member):
    data = _subject(matcher, append_member, 'data')
    pool = matcher.secondary_pool(append_member, data)
    derived = [(e.identifiers, e.expression) for e in pool if e.kind is ElementKind.DERIVED]
    assert derived == [(('isEmpty',), 'data.length==0'), (('length',), 'data.length')]
    assert matcher.match_predicate(append_member, data, 'empty', False) == 'data.length==0'


def test_static_boolean_method_on_parameter(matcher, append_member):
    offset = _subject(matcher, append_member, 'offset')
    pool = [e.expression for e in matcher.secondary_pool(append_member, offset)]
    assert pool == ['Buffer.isValidOffset(offset)', 'Buffer.isDirectSupported()']
    assert (matcher.match_predicate(append_member, offset, 'validoffset', False)
            == 'Buffer.isValidOffset(offset)')


def test_type_subject_boolean_members(matcher, append_member):
    buffer = _subject(matcher, append_member, 'buffer')
    pool = [e.expression for e in matcher.secondary_pool(append_member, buffer)]
    assert pool == ['target.readOnly', 'target.isEmpty()', 'target.isDirectSupported()',
                    'target.isClosed()']
    assert matcher.match_predicate(append_member, buffer, 'empty', False) == 'target.isEmpty()'
    assert matcher.match_predicate(append_member, buffer, 'closed', False) == 'target.isClosed()'


def test_method_subject(matcher, append_member):
    size = _subject(matcher, append_member, 'size')
    assert matcher.match_predicate(append_member, size, 'is zero', False) == 'target.size()==0'
    # int has no members to search
    assert matcher.match_predicate(append_member, size, 'empty', False) is None


def test_method_subject_return_type_members(matcher):
    from docguards.doc_model import DocumentedMember
    member = DocumentedMember(name='submit', containing_type='com.example.Scheduler',
                              parameters=[{'name': 'task', 'type': 'com.example.Task'}])
    current = _subject(matcher, member, 'current')
    assert matcher.match_predicate(member, current, 'done', False) == 'target.current().isDone()'


def test_field_subject_has_no_secondary_pool(matcher, append_member):
    limit = _subject(matcher, append_member, 'limit')
    assert matcher.match_predicate(append_member, limit, 'empty', False) is None
    assert matcher.match_predicate(append_member, limit, 'is positive', False) == 'target.limit>0'


def test_malformed_literal_falls_through_to_secondary_pool(matcher, append_member):
    offset = _subject(matcher, append_member, 'offset')
    assert matcher.match_predicate(append_member, offset, '99999999999', False) is None


def test_target_null_is_rejected(matcher, append_member):
    buffer = _subject(matcher, append_member, 'buffer')
    for predicate in ('null', 'is null', '== null', '= null'):
        assert matcher.match_predicate(append_member, buffer, predicate, False) is None
        assert matcher.match_predicate(append_member, buffer, predicate, True) is None
    assert matcher.match_predicate(append_member, buffer, 'is not null', False) == 'target!=null'


@pytest.mark.parametrize('subject, predicate', [
    ('length', 'is negative'),
    ('offset', '>= 3'),
    ('data', 'is not null'),
    ('data', 'instanceof java.io.Serializable'),
    ('data', 'empty'),
    ('buffer', 'empty'),
])
def test_negation_wraps_whole_expression(matcher, append_member, subject, predicate):
    element = _subject(matcher, append_member, subject)
    inner = matcher.match_predicate(append_member, element, predicate, False)
    assert inner is not None
    assert matcher.match_predicate(append_member, element, predicate, True) == f"({inner}) == false"


def test_tied_predicate_candidates(matcher, submit_member):
    task = _subject(matcher, submit_member, 'task')
    candidates = [e.expression for e in matcher.predicate_candidates(submit_member, task, 'isTone')]
    assert sorted(candidates) == ['task.isDone()', 'task.isGone()']
    chosen = matcher.match_predicate(submit_member, task, 'isTone', False)
    assert chosen in candidates


def test_threshold_governs_predicate_acceptance(program, append_member):
    from docguards.config import TranslatorSettings
    strict = TranslatorSettings(proposition_source='pattern', distance_threshold=1)
    m = Matcher(program, CodeElementCollector(program, PatternPropositionSource(), strict))
    data = _subject(m, append_member, 'data')
    assert m.match_predicate(append_member, data, 'empty', False) is None
