from __future__ import annotations

import enum
import typing

from . import Exceptions
from . import Misc
from . import Tree


class Verdict(enum.Enum):
	MEMBER = 'member'
	NON_MEMBER = 'non-member'
	INCONCLUSIVE = 'inconclusive'
	INVALID_GRAMMAR = 'invalid grammar'
	ERROR = 'error'


class DerivationResult:
	"""
	Class representing the immutable outcome of a word analysis
	"""

	def __init__(self, word: str, verdict: Verdict, tree: typing.Optional[Tree.Tree] = None, trace: typing.Iterable[str] = (), *, error: typing.Optional[BaseException] = None):
		"""
		Class representing the immutable outcome of a word analysis
		- Constructor -
		:param word: The analyzed word
		:param verdict: The outcome of the analysis
		:param tree: The derivation tree; only kept when the verdict is MEMBER
		:param trace: The sentential forms visited, in order
		:param error: The exception that aborted the analysis, if any
		:raises InvalidArgumentException: If 'word' is not a string, 'verdict' is not a verdict or 'tree' is not a tree
		"""

		Misc.raise_ifn(isinstance(word, str), Exceptions.InvalidArgumentException(DerivationResult.__init__, 'word', type(word), (str,)))
		Misc.raise_ifn(isinstance(verdict, Verdict), Exceptions.InvalidArgumentException(DerivationResult.__init__, 'verdict', type(verdict), (Verdict,)))
		Misc.raise_ifn(tree is None or isinstance(tree, Tree.Tree), Exceptions.InvalidArgumentException(DerivationResult.__init__, 'tree', type(tree), (Tree.Tree, type(None))))

		self.__word__: str = word
		self.__verdict__: Verdict = verdict
		self.__tree__: typing.Optional[Tree.Tree] = tree if verdict is Verdict.MEMBER else None
		self.__trace__: tuple[str, ...] = tuple(str(line) for line in trace)
		self.__error__: typing.Optional[BaseException] = error

	def __repr__(self) -> str:
		return f'<DerivationResult[{self.__word__!r}: {self.__verdict__.value}] instance @ {hex(id(self)).upper()}>'

	def __str__(self) -> str:
		lines: list[str] = [f'Word: {Misc.display_form(self.__word__)}', f'Membership: {"YES" if self.is_member else "NO"} ({self.__verdict__.value})']

		if self.is_member and len(self.__trace__) > 0:
			lines.append('')
			lines.append('Derivation steps:')
			lines.extend(self.__trace__)

		return '\n'.join(lines)

	def report(self) -> str:
		"""
		Generates a detailed multi-line report of this result
		The derivation steps and tree are only included for members
		:return: The report text
		"""

		lines: list[str] = ['=== ANALYSIS REPORT ===', '', f'Word: "{self.__word__}"', '']

		if self.is_member:
			lines.append('Result: The word belongs to the language.')
			lines.append('')

			if len(self.__trace__) > 0:
				lines.append('Derivation:')
				lines.extend(self.__trace__)
				lines.append('')

			if self.__tree__ is not None:
				lines.append('Derivation tree:')
				lines.append(self.__tree__.render())

			return '\n'.join(lines)

		lines.append('Result: The word does not belong to the language.')
		lines.append('')

		if self.__verdict__ is Verdict.INCONCLUSIVE:
			lines.append('No derivation was found within the search depth limit; a longer derivation may still exist.')
		elif self.__verdict__ is Verdict.INVALID_GRAMMAR:
			lines.append('The grammar is incomplete, so no derivation was attempted.')
		elif self.__verdict__ is Verdict.ERROR:
			lines.append(f'The analysis failed with an internal error: {type(self.__error__).__name__}: {self.__error__}')
		else:
			lines.append('No derivation sequence generates this word.')

		return '\n'.join(lines) + '\n'

	@property
	def word(self) -> str:
		return self.__word__

	@property
	def verdict(self) -> Verdict:
		return self.__verdict__

	@property
	def is_member(self) -> bool:
		"""
		:return: Whether a derivation of the word was found
		"""

		return self.__verdict__ is Verdict.MEMBER

	@property
	def tree(self) -> typing.Optional[Tree.Tree]:
		"""
		:return: The derivation tree, or None if the word is not a member
		"""

		return self.__tree__

	@property
	def trace(self) -> tuple[str, ...]:
		"""
		:return: The visited sentential forms in chronological order, including failed branches
		"""

		return self.__trace__

	@property
	def error(self) -> typing.Optional[BaseException]:
		"""
		:return: The exception that aborted the analysis, or None
		"""

		return self.__error__
