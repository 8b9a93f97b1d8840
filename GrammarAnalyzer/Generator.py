from __future__ import annotations

import typing

from . import Exceptions
from . import Grammar
from . import Logger
from . import Misc
from . import Tree


class GeneralTreeGenerator:
	"""
	Class building a bounded exploration tree of every production reachable from the start symbol
	Production nodes ('X -> rhs') alternate with symbol nodes; a nonterminal is not expanded again on a path that already expanded it
	"""

	INVALID_LABEL: str = 'Invalid grammar'

	def __init__(self, grammar: Grammar.Grammar, *, logger: typing.Optional[Logger.Logger] = None):
		"""
		Class building a bounded exploration tree of every production reachable from the start symbol
		- Constructor -
		:param grammar: The grammar to explore; it is read, never modified
		:param logger: The log writer receiving generation diagnostics
		:raises InvalidArgumentException: If 'grammar' is not a grammar or 'logger' is not a log writer
		"""

		Misc.raise_ifn(isinstance(grammar, Grammar.Grammar), Exceptions.InvalidArgumentException(GeneralTreeGenerator.__init__, 'grammar', type(grammar), (Grammar.Grammar,)))
		Misc.raise_ifn(logger is None or isinstance(logger, Logger.Logger), Exceptions.InvalidArgumentException(GeneralTreeGenerator.__init__, 'logger', type(logger), (Logger.Logger, type(None))))
		self.__grammar__: Grammar.Grammar = grammar
		self.__logger__: typing.Optional[Logger.Logger] = logger

	def __expand__(self, node: Tree.Tree, symbol: str, visited: frozenset[str], depth: int, max_depth: int) -> None:
		if depth >= max_depth or symbol in visited:
			return

		branch: frozenset[str] = visited | {symbol}

		for rhs in self.__grammar__.productions_for(symbol):
			production: Tree.Tree = node.add_child(f'{symbol} -> {rhs}')

			if rhs == Grammar.Grammar.EPSILON:
				continue

			for character in rhs:
				terminal: bool = self.__grammar__.is_terminal(character)
				child: Tree.Tree = production.add_child(character, terminal)

				if not terminal:
					self.__expand__(child, character, branch, depth + 1, max_depth)

	def generate(self, max_depth: int) -> Tree.Tree:
		"""
		Generates the exploration tree rooted at the start symbol
		The range of 'max_depth' is the caller's responsibility
		:param max_depth: The number of nonterminal expansion levels
		:return: The exploration tree, or a single 'Invalid grammar' node if the grammar is not valid
		:raises InvalidArgumentException: If 'max_depth' is not an integer
		"""

		Misc.raise_ifn(isinstance(max_depth, int) and not isinstance(max_depth, bool), Exceptions.InvalidArgumentException(GeneralTreeGenerator.generate, 'max_depth', type(max_depth), (int,)))

		if not self.__grammar__.is_valid():
			if self.__logger__ is not None:
				self.__logger__.warn('General tree requested for an invalid grammar')

			return Tree.Tree(GeneralTreeGenerator.INVALID_LABEL)

		root: Tree.Tree = Tree.Tree(self.__grammar__.start)
		self.__expand__(root, self.__grammar__.start, frozenset(), 0, max_depth)

		if self.__logger__ is not None:
			self.__logger__.debug(f'General tree of depth {max_depth} generated with {root.size} nodes')

		return root

	@property
	def grammar(self) -> Grammar.Grammar:
		return self.__grammar__
