import pytest

from GrammarAnalyzer.Exceptions import GrammarDecodeError, GrammarDefinitionError
from GrammarAnalyzer.Grammar import Grammar


def test_duplicate_terminal_is_rejected():
	grammar: Grammar = Grammar()

	assert grammar.add_terminal('a')
	assert not grammar.add_terminal('a')
	assert grammar.terminals == ('a',)


def test_duplicate_nonterminal_is_rejected():
	grammar: Grammar = Grammar()

	assert grammar.add_nonterminal('S')
	assert not grammar.add_nonterminal('S')
	assert grammar.nonterminals == ('S',)


def test_symbol_cannot_be_terminal_and_nonterminal():
	grammar: Grammar = Grammar()

	assert grammar.add_terminal('a')
	assert not grammar.add_nonterminal('a')
	assert grammar.add_nonterminal('S')
	assert not grammar.add_terminal('S')
	assert grammar.terminals == ('a',)
	assert grammar.nonterminals == ('S',)


@pytest.mark.parametrize('symbol', ['ab', '', ' ', 'ε', ',', '{', '}', '|', 5, None])
def test_unusable_symbols_are_rejected(symbol):
	grammar: Grammar = Grammar()

	assert not grammar.add_terminal(symbol)
	assert not grammar.add_nonterminal(symbol)
	assert grammar.terminals == ()
	assert grammar.nonterminals == ()


def test_start_symbol_must_be_nonterminal():
	grammar: Grammar = Grammar(['a'], ['S', 'A'])

	assert not grammar.set_start_symbol('a')
	assert not grammar.set_start_symbol('X')
	assert grammar.start == ''
	assert grammar.set_start_symbol('S')
	assert not grammar.set_start_symbol('a')
	assert grammar.start == 'S'


def test_add_production_validation():
	grammar: Grammar = Grammar(['a', 'b'], ['S', 'A'], 'S')

	assert not grammar.add_production('X', 'a')
	assert not grammar.add_production('a', 'a')
	assert not grammar.add_production('S', 'ac')
	assert not grammar.add_production('S', '')
	assert not grammar.add_production('S', 'aε')
	assert grammar.productions == {}

	assert grammar.add_production('S', 'aA')
	assert grammar.add_production('S', 'ε')
	assert grammar.add_production('S', 'aA')
	assert grammar.productions_for('S') == ('aA', 'ε', 'aA')
	assert grammar.production_count == 3


def test_productions_for_unknown_symbol_is_empty():
	grammar: Grammar = Grammar(['a'], ['S'], 'S', {'S': ['a']})

	assert grammar.productions_for('A') == ()
	assert grammar.productions_for('a') == ()


def test_validity_requires_all_four_parts():
	grammar: Grammar = Grammar()
	assert not grammar.is_valid()

	grammar.add_terminal('a')
	assert not grammar.is_valid()

	grammar.add_nonterminal('S')
	assert not grammar.is_valid()

	grammar.set_start_symbol('S')
	assert not grammar.is_valid()

	grammar.add_production('S', 'a')
	assert grammar.is_valid()


def test_validity_does_not_require_productions_for_every_nonterminal():
	assert Grammar(['a'], ['S', 'A'], 'S', {'S': ['a']}).is_valid()


def test_constructor_rejects_invalid_parts():
	with pytest.raises(GrammarDefinitionError):
		Grammar(['a', 'a'])

	with pytest.raises(GrammarDefinitionError):
		Grammar(['a'], ['S'], 'A')

	with pytest.raises(GrammarDefinitionError):
		Grammar(['a'], ['S'], 'S', {'S': ['b']})


def test_serialize():
	grammar: Grammar = Grammar(['a', 'b'], ['S', 'A'], 'S', {'S': ['aA', 'b'], 'A': ['ε']})

	assert grammar.serialize() == 'G = ({a, b}, {S, A}, S, P)\nS -> aA\nS -> b\nA -> ε'
	assert str(grammar) == grammar.serialize()


def test_serialize_then_decode_reproduces_grammar():
	grammar: Grammar = Grammar(['a', 'b', '(', ')'], ['S', 'A', 'B'], 'S', {'S': ['(S)', 'AB', 'ε'], 'B': ['b', 'bB'], 'A': ['a', 'a']})
	decoded: Grammar = Grammar.decode(grammar.serialize())

	assert decoded == grammar
	assert decoded.productions == grammar.productions
	assert decoded.start == 'S'
	assert decoded.serialize() == grammar.serialize()


def test_decode_alternatives_and_blank_lines():
	grammar: Grammar = Grammar.decode('\nG = ({a}, {S}, S, P)\n\nS -> aS | ε\n')

	assert grammar.productions == {'S': ('aS', 'ε')}
	assert grammar.is_valid()


def test_decode_without_start_symbol():
	grammar: Grammar = Grammar.decode('G = ({a}, {S}, , P)')

	assert grammar.start == ''
	assert not grammar.is_valid()


@pytest.mark.parametrize('text, line_number', [
	('', None),
	('G = {a}, {S}, S, P', 1),
	('G = ({a}, {S}, A, P)', 1),
	('G = ({a, a}, {S}, S, P)', 1),
	('G = ({a}, {S}, S, P)\nS = a', 2),
	('G = ({a}, {S}, S, P)\nS -> a\nS -> b', 3),
	('G = ({a}, {S}, S, P)\nS -> a |', 2),
])
def test_decode_errors(text, line_number):
	with pytest.raises(GrammarDecodeError) as info:
		Grammar.decode(text)

	assert info.value.line_number == line_number


def test_nullable():
	assert Grammar(['b'], ['S', 'A', 'B'], 'S', {'S': ['AB'], 'A': ['ε'], 'B': ['b', 'ε']}).nullable() == frozenset({'S', 'A', 'B'})
	assert Grammar(['b'], ['S', 'A', 'B'], 'S', {'S': ['AB'], 'A': ['ε'], 'B': ['b']}).nullable() == frozenset({'A'})
	assert Grammar(['a'], ['S'], 'S', {'S': ['S', 'a']}).nullable() == frozenset()


def test_membership():
	grammar: Grammar = Grammar(['a'], ['S'], 'S', {'S': ['a']})

	assert 'a' in grammar
	assert 'S' in grammar
	assert 'b' not in grammar
	assert grammar.is_terminal('a')
	assert grammar.is_nonterminal('S')
	assert not grammar.is_terminal('S')
