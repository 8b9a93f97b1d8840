import pytest

from GrammarAnalyzer.Derivation import DerivationSearch
from GrammarAnalyzer.Exceptions import InvalidArgumentException
from GrammarAnalyzer.Grammar import Grammar
from GrammarAnalyzer.Result import DerivationResult, Verdict
from GrammarAnalyzer.Tree import Tree


def test_member_report():
	result: DerivationResult = DerivationSearch(Grammar(['a'], ['S'], 'S', {'S': ['a']})).analyze('a')

	assert result.report() == (
		'=== ANALYSIS REPORT ===\n'
		'\n'
		'Word: "a"\n'
		'\n'
		'Result: The word belongs to the language.\n'
		'\n'
		'Derivation:\n'
		'0. S\n'
		'1. a (match)\n'
		'\n'
		'Derivation tree:\n'
		'S\n'
		'└── S -> a\n'
	)


def test_non_member_report_omits_trace_and_tree():
	result: DerivationResult = DerivationResult('b', Verdict.NON_MEMBER, trace=['0. S'])
	report: str = result.report()

	assert 'Result: The word does not belong to the language.' in report
	assert 'No derivation sequence generates this word.' in report
	assert '0. S' not in report
	assert 'Derivation tree:' not in report


@pytest.mark.parametrize('verdict, sentence', [
	(Verdict.INCONCLUSIVE, 'within the search depth limit'),
	(Verdict.INVALID_GRAMMAR, 'The grammar is incomplete'),
])
def test_verdict_specific_explanations(verdict, sentence):
	assert sentence in DerivationResult('w', verdict).report()


def test_error_report_names_the_exception():
	result: DerivationResult = DerivationResult('w', Verdict.ERROR, error=RecursionError('too deep'))

	assert 'internal error: RecursionError: too deep' in result.report()
	assert isinstance(result.error, RecursionError)


def test_summary():
	member: DerivationResult = DerivationResult('a', Verdict.MEMBER, Tree('S'), ['0. S', '1. a (match)'])

	assert str(member) == 'Word: a\nMembership: YES (member)\n\nDerivation steps:\n0. S\n1. a (match)'
	assert str(DerivationResult('', Verdict.INCONCLUSIVE)) == 'Word: ε\nMembership: NO (inconclusive)'


def test_tree_is_only_kept_for_members():
	tree: Tree = Tree('S')

	assert DerivationResult('a', Verdict.NON_MEMBER, tree).tree is None
	assert DerivationResult('a', Verdict.MEMBER, tree).tree is tree


def test_trace_is_immutable_snapshot():
	trace: list[str] = ['0. S']
	result: DerivationResult = DerivationResult('a', Verdict.NON_MEMBER, trace=trace)
	trace.append('1. a')

	assert result.trace == ('0. S',)


def test_invalid_arguments():
	with pytest.raises(InvalidArgumentException):
		DerivationResult(None, Verdict.MEMBER)

	with pytest.raises(InvalidArgumentException):
		DerivationResult('a', True)

	with pytest.raises(InvalidArgumentException):
		DerivationResult('a', Verdict.MEMBER, 'S')
