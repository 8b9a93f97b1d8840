from __future__ import annotations

import os
import typing

from . import Derivation
from . import Exceptions
from . import Generator
from . import Grammar
from . import Logger
from . import Misc
from . import Result
from . import Tree
from .Parser import KVP


class GrammarController:
	"""
	Class coordinating a grammar with its derivation search and general tree generator
	Presentation layers talk to this class only; it remembers the most recent analysis
	"""

	MIN_TREE_DEPTH: int = 1
	MAX_TREE_DEPTH: int = 10
	DEFAULT_TREE_DEPTH: int = 3
	MINIMUM_TERMINALS: int = 2
	MINIMUM_NONTERMINALS: int = 3
	MINIMUM_PRODUCTIONS: int = 3

	@classmethod
	def from_kvp(cls, data: str | KVP.KVP, *, logger: typing.Optional[Logger.Logger] = None) -> GrammarController:
		"""
		Builds a controller from a KVP grammar definition
		The 'grammar' namespace holds 'terminals', 'nonterminals', 'start' and a nested 'productions' namespace keyed by nonterminal
		The optional 'analysis' namespace holds 'max_depth' and 'tree_depth'
		:param data: The KVP text or an already decoded KVP object
		:param logger: The log writer passed to the search and generator
		:return: A new controller
		:raises KVPDecodeError: If the text is not valid KVP
		:raises GrammarDecodeError: If the definition is incomplete or has the wrong shape
		:raises GrammarDefinitionError: If the definition declares an invalid grammar
		"""

		kvp: KVP.KVP = data if isinstance(data, KVP.KVP) else KVP.KVP.decode(data)
		definition = kvp.get('grammar')
		Misc.raise_ifn(isinstance(definition, KVP.KVP), Exceptions.GrammarDecodeError('Missing \'grammar\' namespace'))
		productions = definition.get('productions', KVP.KVP('productions', {}))
		Misc.raise_ifn(isinstance(productions, KVP.KVP), Exceptions.GrammarDecodeError('\'productions\' must be a namespace'))

		def _strings(namespace: KVP.KVP, key: str) -> tuple[str, ...]:
			values = namespace.get(key, ())
			Misc.raise_if(isinstance(values, KVP.KVP), Exceptions.GrammarDecodeError(f'\'{key}\' must be a list of values, not a namespace'))
			return tuple(str(x) for x in values if x is not None)

		def _setting(key: str, default: int) -> int:
			value = analysis.first(key, default)

			try:
				return int(value)
			except (TypeError, ValueError):
				raise Exceptions.GrammarDecodeError(f'Setting \'{key}\' must be an integer; got \'{value}\'')

		analysis = kvp.get('analysis', KVP.KVP('analysis', {}))
		Misc.raise_ifn(isinstance(analysis, KVP.KVP), Exceptions.GrammarDecodeError('\'analysis\' must be a namespace'))
		grammar: Grammar.Grammar = Grammar.Grammar(_strings(definition, 'terminals'), _strings(definition, 'nonterminals'), definition.first('start'), {nonterminal: _strings(productions, nonterminal) for nonterminal in productions.keys()})
		return cls(grammar, max_depth=_setting('max_depth', Derivation.DerivationSearch.DEFAULT_MAX_DEPTH), tree_depth=_setting('tree_depth', GrammarController.DEFAULT_TREE_DEPTH), logger=logger)

	@classmethod
	def from_file(cls, path: str | os.PathLike, *, logger: typing.Optional[Logger.Logger] = None) -> GrammarController:
		"""
		Builds a controller from a KVP grammar file
		:param path: The file path
		:param logger: The log writer passed to the search and generator
		:return: A new controller
		:raises FileNotFoundError: If the file does not exist
		:raises KVPDecodeError: If the file is not valid KVP
		:raises GrammarDecodeError: If the definition is incomplete or has the wrong shape
		:raises GrammarDefinitionError: If the definition declares an invalid grammar
		"""

		with open(path, 'r', encoding='utf-8') as f:
			return cls.from_kvp(f.read(), logger=logger)

	def __init__(self, grammar: typing.Optional[Grammar.Grammar] = None, *, max_depth: int = Derivation.DerivationSearch.DEFAULT_MAX_DEPTH, tree_depth: int = DEFAULT_TREE_DEPTH, logger: typing.Optional[Logger.Logger] = None):
		"""
		Class coordinating a grammar with its derivation search and general tree generator
		- Constructor -
		:param grammar: The grammar to manage; a new empty grammar if None
		:param max_depth: The derivation search depth bound
		:param tree_depth: The default general tree depth
		:param logger: The log writer passed to the search and generator
		:raises InvalidArgumentException: If 'grammar' is not a grammar
		:raises ValueError: If 'tree_depth' is out of range
		"""

		grammar = Grammar.Grammar() if grammar is None else grammar
		Misc.raise_ifn(isinstance(grammar, Grammar.Grammar), Exceptions.InvalidArgumentException(GrammarController.__init__, 'grammar', type(grammar), (Grammar.Grammar,)))
		self.__grammar__: Grammar.Grammar = grammar
		self.__logger__: typing.Optional[Logger.Logger] = logger
		self.__search__: Derivation.DerivationSearch = Derivation.DerivationSearch(grammar, max_depth=max_depth, logger=logger)
		self.__generator__: Generator.GeneralTreeGenerator = Generator.GeneralTreeGenerator(grammar, logger=logger)
		self.__tree_depth__: int = self.__check_tree_depth__(tree_depth)
		self.__last_result__: typing.Optional[Result.DerivationResult] = None

	@staticmethod
	def __check_tree_depth__(depth: int) -> int:
		Misc.raise_ifn(isinstance(depth, int) and not isinstance(depth, bool), Exceptions.InvalidArgumentException(GrammarController.general_tree, 'max_depth', type(depth), (int,)))
		Misc.raise_ifn(GrammarController.MIN_TREE_DEPTH <= depth <= GrammarController.MAX_TREE_DEPTH, ValueError(f'Tree depth must be between {GrammarController.MIN_TREE_DEPTH} and {GrammarController.MAX_TREE_DEPTH}; got {depth}'))
		return depth

	def __log_edit__(self, accepted: bool, what: str) -> bool:
		if self.__logger__ is not None and not accepted:
			self.__logger__.warn(f'Rejected {what}')
		elif self.__logger__ is not None:
			self.__logger__.info(f'Added {what}')

		return accepted

	def add_terminal(self, symbol: str) -> bool:
		return self.__log_edit__(self.__grammar__.add_terminal(symbol), f'terminal \'{symbol}\'')

	def add_nonterminal(self, symbol: str) -> bool:
		return self.__log_edit__(self.__grammar__.add_nonterminal(symbol), f'nonterminal \'{symbol}\'')

	def set_start_symbol(self, symbol: str) -> bool:
		return self.__log_edit__(self.__grammar__.set_start_symbol(symbol), f'start symbol \'{symbol}\'')

	def add_production(self, nonterminal: str, rhs: str) -> bool:
		return self.__log_edit__(self.__grammar__.add_production(nonterminal, rhs), f'production \'{nonterminal} -> {rhs}\'')

	def is_valid(self) -> bool:
		return self.__grammar__.is_valid()

	def grammar_text(self) -> str:
		"""
		:return: The serialized grammar
		"""

		return self.__grammar__.serialize()

	def analyze(self, word: str) -> Result.DerivationResult:
		"""
		Analyzes a word and remembers the result
		:param word: The word to analyze
		:return: The analysis result
		"""

		self.__last_result__ = self.__search__.analyze(word)
		return self.__last_result__

	def general_tree(self, max_depth: typing.Optional[int] = None) -> Tree.Tree:
		"""
		Generates the general exploration tree
		:param max_depth: The expansion depth, between MIN_TREE_DEPTH and MAX_TREE_DEPTH; the configured tree depth if None
		:return: The exploration tree
		:raises InvalidArgumentException: If 'max_depth' is not an integer
		:raises ValueError: If 'max_depth' is out of range
		"""

		depth: int = self.__tree_depth__ if max_depth is None else self.__check_tree_depth__(max_depth)
		return self.__generator__.generate(depth)

	def meets_minimum_requirements(self) -> bool:
		"""
		:return: Whether the grammar has at least MINIMUM_TERMINALS terminals, MINIMUM_NONTERMINALS nonterminals and MINIMUM_PRODUCTIONS productions
		"""

		return len(self.__grammar__.terminals) >= GrammarController.MINIMUM_TERMINALS and len(self.__grammar__.nonterminals) >= GrammarController.MINIMUM_NONTERMINALS and self.__grammar__.production_count >= GrammarController.MINIMUM_PRODUCTIONS

	def requirements_report(self) -> str:
		"""
		:return: A checklist of the minimum grammar requirements
		"""

		rows: tuple[tuple[str, int, int], ...] = (
			('Terminal symbols', len(self.__grammar__.terminals), GrammarController.MINIMUM_TERMINALS),
			('Nonterminal symbols', len(self.__grammar__.nonterminals), GrammarController.MINIMUM_NONTERMINALS),
			('Productions', self.__grammar__.production_count, GrammarController.MINIMUM_PRODUCTIONS),
		)

		lines: list[str] = ['Minimum requirements:']
		lines.extend(f'- {name}: {count} of {minimum} minimum {"✓" if count >= minimum else "✗"}' for name, count, minimum in rows)
		return '\n'.join(lines)

	def to_kvp(self) -> KVP.KVP:
		"""
		Converts the grammar and analysis settings into a KVP object readable by 'GrammarController.from_kvp'
		:return: The KVP object
		"""

		return KVP.KVP(None, {
			'grammar': {
				'terminals': self.__grammar__.terminals,
				'nonterminals': self.__grammar__.nonterminals,
				'start': self.__grammar__.start if len(self.__grammar__.start) > 0 else None,
				'productions': self.__grammar__.productions,
			},
			'analysis': {
				'max_depth': self.__search__.max_depth,
				'tree_depth': self.__tree_depth__,
			},
		})

	def save(self, path: str | os.PathLike) -> None:
		"""
		Writes the grammar and analysis settings to a KVP file
		:param path: The file path
		"""

		with open(path, 'w', encoding='utf-8') as f:
			f.write(self.to_kvp().encode())

	@property
	def grammar(self) -> Grammar.Grammar:
		return self.__grammar__

	@property
	def search(self) -> Derivation.DerivationSearch:
		return self.__search__

	@property
	def tree_depth(self) -> int:
		return self.__tree_depth__

	@property
	def last_result(self) -> typing.Optional[Result.DerivationResult]:
		"""
		:return: The result of the most recent analysis, or None
		"""

		return self.__last_result__
