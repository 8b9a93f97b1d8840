from __future__ import annotations

import re
import typing

from . import Exceptions
from . import Misc


class Grammar:
	"""
	Class representing a formal grammar G = ({terminals}, {nonterminals}, start, P)
	Symbols are single characters kept in insertion order; productions map a nonterminal to an ordered list of right-hand sides
	Edits report success as a boolean and never partially mutate the grammar
	"""

	EPSILON: str = Misc.EPSILON
	__HEADER__: re.Pattern = re.compile(r'^G = \(\{(.*?)\}, \{(.*?)\}, (.?), P\)$')

	@classmethod
	def decode(cls, text: str) -> Grammar:
		"""
		Parses grammar text as produced by 'Grammar.serialize'
		The first non-blank line is the header 'G = ({...}, {...}, S, P)', each following line is a production 'X -> rhs'
		Alternatives may be joined with '|' ('X -> aX | b')
		:param text: The text to parse
		:return: A new grammar
		:raises InvalidArgumentException: If 'text' is not a string
		:raises GrammarDecodeError: If the text is malformed or declares an invalid grammar
		"""

		Misc.raise_ifn(isinstance(text, str), Exceptions.InvalidArgumentException(Grammar.decode, 'text', type(text), (str,)))
		lines: list[tuple[int, str]] = [(i, line.rstrip()) for i, line in enumerate(text.split('\n'), start=1) if len(line.strip()) > 0]

		if len(lines) == 0:
			raise Exceptions.GrammarDecodeError('Grammar text is empty')

		line_number, header = lines[0]
		match: typing.Optional[re.Match] = Grammar.__HEADER__.match(header)

		if match is None:
			raise Exceptions.GrammarDecodeError(f'Malformed grammar header \'{header}\'', line_number)

		grammar: Grammar = cls()
		terminals, nonterminals, start = match.groups()

		for symbol in Grammar.__split_symbols__(terminals):
			if not grammar.add_terminal(symbol):
				raise Exceptions.GrammarDecodeError(f'Invalid terminal \'{symbol}\'', line_number)

		for symbol in Grammar.__split_symbols__(nonterminals):
			if not grammar.add_nonterminal(symbol):
				raise Exceptions.GrammarDecodeError(f'Invalid nonterminal \'{symbol}\'', line_number)

		if len(start) > 0 and not grammar.set_start_symbol(start):
			raise Exceptions.GrammarDecodeError(f'Start symbol \'{start}\' is not a nonterminal', line_number)

		for line_number, line in lines[1:]:
			lhs, separator, alternatives = line.partition('->')
			lhs = lhs.strip()

			if len(separator) == 0 or len(lhs) == 0:
				raise Exceptions.GrammarDecodeError(f'Malformed production \'{line}\'', line_number)

			for rhs in alternatives.split('|'):
				if not grammar.add_production(lhs, rhs.strip()):
					raise Exceptions.GrammarDecodeError(f'Invalid production \'{lhs} -> {rhs.strip()}\'', line_number)

		return grammar

	@staticmethod
	def __split_symbols__(listing: str) -> tuple[str, ...]:
		return tuple(symbol.strip() for symbol in listing.split(',')) if len(listing.strip()) > 0 else ()

	def __init__(self, terminals: typing.Iterable[str] = (), nonterminals: typing.Iterable[str] = (), start: typing.Optional[str] = None, productions: typing.Optional[typing.Mapping[str, typing.Iterable[str]]] = None):
		"""
		Class representing a formal grammar G = ({terminals}, {nonterminals}, start, P)
		- Constructor -
		All arguments are optional; the grammar may also be built incrementally with the 'add_*' methods
		:param terminals: The terminal symbols
		:param nonterminals: The nonterminal symbols
		:param start: The start symbol
		:param productions: A mapping of nonterminal to its right-hand sides in order
		:raises GrammarDefinitionError: If any supplied symbol, start symbol or production is rejected
		"""

		self.__terminals__: dict[str, None] = {}
		self.__nonterminals__: dict[str, None] = {}
		self.__start__: str = ''
		self.__productions__: dict[str, list[str]] = {}

		for symbol in terminals:
			Misc.raise_ifn(self.add_terminal(symbol), Exceptions.GrammarDefinitionError(f'Terminal rejected: \'{symbol}\''))

		for symbol in nonterminals:
			Misc.raise_ifn(self.add_nonterminal(symbol), Exceptions.GrammarDefinitionError(f'Nonterminal rejected: \'{symbol}\''))

		if start is not None:
			Misc.raise_ifn(self.set_start_symbol(start), Exceptions.GrammarDefinitionError(f'Start symbol is not a nonterminal: \'{start}\''))

		for nonterminal, alternatives in ({} if productions is None else productions).items():
			for rhs in ((alternatives,) if isinstance(alternatives, str) else alternatives):
				Misc.raise_ifn(self.add_production(nonterminal, rhs), Exceptions.GrammarDefinitionError(f'Production rejected: \'{nonterminal} -> {rhs}\''))

	def __contains__(self, symbol: str) -> bool:
		return symbol in self.__terminals__ or symbol in self.__nonterminals__

	def __eq__(self, other: Grammar) -> bool:
		return isinstance(other, Grammar) and set(self.__terminals__) == set(other.__terminals__) and set(self.__nonterminals__) == set(other.__nonterminals__) and self.__start__ == other.__start__ and self.__productions__ == other.__productions__

	__hash__ = None

	def __repr__(self) -> str:
		return f'<Grammar[{self.__start__}] instance @ {hex(id(self)).upper()}>'

	def __str__(self) -> str:
		return self.serialize()

	def add_terminal(self, symbol: str) -> bool:
		"""
		Declares a terminal symbol
		:param symbol: The symbol to add
		:return: False if the symbol is not a single usable character or is already declared as either a terminal or a nonterminal
		"""

		if not Misc.is_symbol(symbol) or symbol in self:
			return False

		self.__terminals__[symbol] = None
		return True

	def add_nonterminal(self, symbol: str) -> bool:
		"""
		Declares a nonterminal symbol
		:param symbol: The symbol to add
		:return: False if the symbol is not a single usable character or is already declared as either a terminal or a nonterminal
		"""

		if not Misc.is_symbol(symbol) or symbol in self:
			return False

		self.__nonterminals__[symbol] = None
		return True

	def set_start_symbol(self, symbol: str) -> bool:
		"""
		Sets the start symbol
		:param symbol: The new start symbol
		:return: False if the symbol is not a declared nonterminal; the previous start symbol is kept
		"""

		if not Misc.is_string(symbol) or symbol not in self.__nonterminals__:
			return False

		self.__start__ = symbol
		return True

	def add_production(self, nonterminal: str, rhs: str) -> bool:
		"""
		Appends a production 'nonterminal -> rhs'
		Duplicate productions are kept
		:param nonterminal: The left-hand side
		:param rhs: The right-hand side, either the epsilon marker or a string of declared symbols
		:return: False if the left-hand side is not a declared nonterminal or the right-hand side is empty or uses an undeclared symbol
		"""

		if not Misc.is_string(nonterminal) or not Misc.is_string(rhs) or nonterminal not in self.__nonterminals__ or len(rhs) == 0:
			return False
		elif rhs != Grammar.EPSILON and any(symbol not in self for symbol in rhs):
			return False

		self.__productions__.setdefault(nonterminal, []).append(rhs)
		return True

	def is_valid(self) -> bool:
		"""
		:return: Whether terminals, nonterminals, the start symbol and productions are all present
		"""

		return len(self.__terminals__) > 0 and len(self.__nonterminals__) > 0 and len(self.__start__) > 0 and len(self.__productions__) > 0

	def is_terminal(self, symbol: str) -> bool:
		return symbol in self.__terminals__

	def is_nonterminal(self, symbol: str) -> bool:
		return symbol in self.__nonterminals__

	def productions_for(self, nonterminal: str) -> tuple[str, ...]:
		"""
		:param nonterminal: The left-hand side to look up
		:return: The right-hand sides of 'nonterminal' in insertion order, empty if it has none
		"""

		return tuple(self.__productions__.get(nonterminal, ()))

	def nullable(self) -> frozenset[str]:
		"""
		Computes the nonterminals that can derive the empty word
		:return: The set of nullable nonterminals
		"""

		nullable: set[str] = set()
		changed: bool = True

		while changed:
			changed = False

			for nonterminal, alternatives in self.__productions__.items():
				if nonterminal not in nullable and any(rhs == Grammar.EPSILON or all(symbol in nullable for symbol in rhs) for rhs in alternatives):
					nullable.add(nonterminal)
					changed = True

		return frozenset(nullable)

	def serialize(self) -> str:
		"""
		Converts this grammar into its text form
		The first line is 'G = ({terminals}, {nonterminals}, start, P)', followed by one 'X -> rhs' line per production
		:return: The grammar text
		"""

		lines: list[str] = [f'G = ({{{", ".join(self.__terminals__)}}}, {{{", ".join(self.__nonterminals__)}}}, {self.__start__}, P)']
		lines.extend(f'{nonterminal} -> {rhs}' for nonterminal, alternatives in self.__productions__.items() for rhs in alternatives)
		return '\n'.join(lines)

	@property
	def terminals(self) -> tuple[str, ...]:
		"""
		:return: The terminal symbols in declaration order
		"""

		return tuple(self.__terminals__)

	@property
	def nonterminals(self) -> tuple[str, ...]:
		"""
		:return: The nonterminal symbols in declaration order
		"""

		return tuple(self.__nonterminals__)

	@property
	def start(self) -> str:
		"""
		:return: The start symbol or an empty string if unset
		"""

		return self.__start__

	@property
	def productions(self) -> dict[str, tuple[str, ...]]:
		"""
		:return: A copy of the production mapping
		"""

		return {nonterminal: tuple(alternatives) for nonterminal, alternatives in self.__productions__.items()}

	@property
	def production_count(self) -> int:
		"""
		:return: The total number of productions
		"""

		return sum(len(alternatives) for alternatives in self.__productions__.values())
