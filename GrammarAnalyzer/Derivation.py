from __future__ import annotations

import typing

from . import Exceptions
from . import Grammar
from . import Logger
from . import Misc
from . import Result
from . import Tree

Verdict = Result.Verdict


class DerivationSearch:
	"""
	Class deciding word membership by bounded rewrite search

	Starting from the start symbol, every nonterminal position of the current sentential form is tried left to right,
	and every production of that nonterminal in declaration order; the first successful rewrite chain wins.
	The search is depth bounded, so a word needing more rewrites than 'max_depth' is reported as INCONCLUSIVE rather than derived.
	A form is dropped once it cannot shrink to the word's length in the rewrites left, and a form that already failed with at least as many rewrites left is not searched again.
	"""

	DEFAULT_MAX_DEPTH: int = 10

	def __init__(self, grammar: Grammar.Grammar, *, max_depth: int = DEFAULT_MAX_DEPTH, logger: typing.Optional[Logger.Logger] = None):
		"""
		Class deciding word membership by bounded rewrite search
		- Constructor -
		:param grammar: The grammar to search; it is read, never modified
		:param max_depth: The maximum number of rewrites along one derivation
		:param logger: The log writer receiving search diagnostics
		:raises InvalidArgumentException: If 'grammar' is not a grammar, 'max_depth' is not an integer or 'logger' is not a log writer
		:raises ValueError: If 'max_depth' is negative
		"""

		Misc.raise_ifn(isinstance(grammar, Grammar.Grammar), Exceptions.InvalidArgumentException(DerivationSearch.__init__, 'grammar', type(grammar), (Grammar.Grammar,)))
		Misc.raise_ifn(logger is None or isinstance(logger, Logger.Logger), Exceptions.InvalidArgumentException(DerivationSearch.__init__, 'logger', type(logger), (Logger.Logger, type(None))))
		self.__grammar__: Grammar.Grammar = grammar
		self.__logger__: typing.Optional[Logger.Logger] = logger
		self.__max_depth__: int = DerivationSearch.DEFAULT_MAX_DEPTH
		self.max_depth = max_depth

	def __search__(self, word: str) -> Result.DerivationResult:
		grammar: Grammar.Grammar = self.__grammar__
		nullable: frozenset[str] = grammar.nullable()
		max_depth: int = self.__max_depth__
		trace: list[str] = []
		root: Tree.Tree = Tree.Tree(grammar.start)
		failed: dict[str, int] = {}
		bounded: bool = False

		def _minimum_length(form: str) -> int:
			return sum(0 if symbol in nullable else 1 for symbol in form)

		def _derive(form: str, node: Tree.Tree, depth: int) -> bool:
			nonlocal bounded

			if depth > max_depth:
				bounded = True
				return False
			elif _minimum_length(form) > len(word):
				return False
			elif len(form) - (max_depth - depth) > len(word):
				# Each remaining rewrite removes at most one symbol
				bounded = True
				return False
			elif form in failed and failed[form] <= depth:
				return False
			elif form == word:
				trace.append(f'{depth}. {Misc.display_form(form)} (match)')
				return True

			trace.append(f'{depth}. {Misc.display_form(form)}')

			for position, symbol in enumerate(form):
				if not grammar.is_nonterminal(symbol):
					continue

				for rhs in grammar.productions_for(symbol):
					replacement: str = '' if rhs == Grammar.Grammar.EPSILON else rhs
					child: Tree.Tree = node.add_child(f'{symbol} -> {rhs}')

					if _derive(form[:position] + replacement + form[position + 1:], child, depth + 1):
						return True

			failed[form] = depth
			return False

		if _derive(grammar.start, root, 0):
			return Result.DerivationResult(word, Verdict.MEMBER, root, trace)

		return Result.DerivationResult(word, Verdict.INCONCLUSIVE if bounded else Verdict.NON_MEMBER, None, trace)

	def analyze(self, word: str) -> Result.DerivationResult:
		"""
		Determines whether the word can be derived from the start symbol
		This method never raises; unexpected failures are logged and reported with the ERROR verdict
		:param word: The word to analyze
		:return: The analysis result
		"""

		word = str(word)

		if not self.__grammar__.is_valid():
			if self.__logger__ is not None:
				self.__logger__.warn(f'Analysis of "{word}" skipped: grammar is not valid')

			return Result.DerivationResult(word, Verdict.INVALID_GRAMMAR)

		try:
			if self.__logger__ is not None:
				self.__logger__.debug(f'Analyzing "{word}" with maximum depth {self.__max_depth__}')

			result: Result.DerivationResult = self.__search__(word)

			if self.__logger__ is not None:
				self.__logger__.debug(f'Analysis of "{word}" finished: {result.verdict.value} after {len(result.trace)} steps')

			return result
		except Exception as err:
			if self.__logger__ is not None:
				self.__logger__.error(f'Analysis of "{word}" failed: {type(err).__name__}: {err}')

			return Result.DerivationResult(word, Verdict.ERROR, error=err)

	@property
	def grammar(self) -> Grammar.Grammar:
		return self.__grammar__

	@property
	def max_depth(self) -> int:
		"""
		:return: The maximum number of rewrites along one derivation
		"""

		return self.__max_depth__

	@max_depth.setter
	def max_depth(self, max_depth: int) -> None:
		"""
		Sets the maximum number of rewrites along one derivation
		:param max_depth: The new depth bound
		:raises InvalidArgumentException: If 'max_depth' is not an integer
		:raises ValueError: If 'max_depth' is negative
		"""

		Misc.raise_ifn(isinstance(max_depth, int) and not isinstance(max_depth, bool), Exceptions.InvalidArgumentException(DerivationSearch.max_depth.fset, 'max_depth', type(max_depth), (int,)))
		Misc.raise_if(max_depth < 0, ValueError(f'Maximum depth must be non-negative; got {max_depth}'))
		self.__max_depth__ = max_depth
