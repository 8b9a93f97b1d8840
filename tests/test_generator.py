import pytest

from GrammarAnalyzer.Exceptions import InvalidArgumentException
from GrammarAnalyzer.Generator import GeneralTreeGenerator
from GrammarAnalyzer.Grammar import Grammar
from GrammarAnalyzer.Tree import Tree


def expansion_chain(node: Tree, grammar: Grammar) -> int:
	"""Longest chain of expanded nonterminal nodes from 'node' downwards"""

	below: int = max((expansion_chain(child, grammar) for child in node.children), default=0)
	return below + (1 if grammar.is_nonterminal(node.label) and not node.leaf else 0)


def test_recursive_grammar_terminates_within_depth():
	grammar: Grammar = Grammar(['a'], ['S'], 'S', {'S': ['aS', 'ε']})
	tree: Tree = GeneralTreeGenerator(grammar).generate(2)

	assert expansion_chain(tree, grammar) <= 2
	assert tree.render() == (
		'S\n'
		'├── S -> aS\n'
		'│   ├── a\n'
		'│   └── S\n'
		'└── S -> ε\n'
	)


def test_symbol_nodes_carry_terminal_flags():
	grammar: Grammar = Grammar(['a'], ['S'], 'S', {'S': ['aS', 'ε']})
	production: Tree = GeneralTreeGenerator(grammar).generate(2).children[0]

	assert [(child.label, child.terminal) for child in production.children] == [('a', True), ('S', False)]
	assert GeneralTreeGenerator(grammar).generate(2).children[1].leaf


def test_depth_limits_expansion():
	grammar: Grammar = Grammar(['a', 'b'], ['S', 'A'], 'S', {'S': ['aA'], 'A': ['b', 'S']})
	generator: GeneralTreeGenerator = GeneralTreeGenerator(grammar)

	assert generator.generate(1).render() == (
		'S\n'
		'└── S -> aA\n'
		'    ├── a\n'
		'    └── A\n'
	)
	assert generator.generate(2).render() == (
		'S\n'
		'└── S -> aA\n'
		'    ├── a\n'
		'    └── A\n'
		'        ├── A -> b\n'
		'        │   └── b\n'
		'        └── A -> S\n'
		'            └── S\n'
	)
	assert generator.generate(10) == generator.generate(2)


def test_cycle_guard_is_per_path():
	grammar: Grammar = Grammar(['a'], ['S', 'A'], 'S', {'S': ['AA'], 'A': ['a']})
	tree: Tree = GeneralTreeGenerator(grammar).generate(3)
	siblings: tuple[Tree, ...] = tree.children[0].children

	assert [node.label for node in siblings] == ['A', 'A']
	assert all([child.label for child in node.children] == ['A -> a'] for node in siblings)


def test_zero_depth_is_root_only():
	grammar: Grammar = Grammar(['a'], ['S'], 'S', {'S': ['a']})

	assert GeneralTreeGenerator(grammar).generate(0) == Tree('S')


def test_invalid_grammar_returns_sentinel():
	tree: Tree = GeneralTreeGenerator(Grammar(['a'], ['S'])).generate(3)

	assert tree.label == GeneralTreeGenerator.INVALID_LABEL
	assert tree.leaf


def test_invalid_arguments():
	grammar: Grammar = Grammar(['a'], ['S'], 'S', {'S': ['a']})

	with pytest.raises(InvalidArgumentException):
		GeneralTreeGenerator(None)

	with pytest.raises(InvalidArgumentException):
		GeneralTreeGenerator(grammar).generate('2')

	with pytest.raises(InvalidArgumentException):
		GeneralTreeGenerator(grammar, logger='log')
