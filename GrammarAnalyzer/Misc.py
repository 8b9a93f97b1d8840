import typing
import typeguard

from . import Exceptions


EPSILON: str = 'ε'
RESERVED_SYMBOLS: frozenset[str] = frozenset('{},|')


def raise_if(expression: bool, exception: BaseException = AssertionError('Assertion Failed')) -> None:
	"""
	Raises an exception if the expression evaluates to True
	:param expression: The expression to evaluate
	:param exception: The exception to raise
	"""

	if not isinstance(exception, BaseException):
		raise Exceptions.InvalidArgumentException(raise_if, 'exception', type(exception))
	elif expression:
		raise exception


def raise_ifn(expression: bool, exception: BaseException = AssertionError('Assertion Failed')) -> None:
	"""
	Raises an exception if the expression evaluates to False
	:param expression: The expression to evaluate
	:param exception: The exception to raise
	"""

	if not isinstance(exception, BaseException):
		raise Exceptions.InvalidArgumentException(raise_ifn, 'exception', type(exception))
	elif not expression:
		raise exception


def is_string(value: typing.Any) -> bool:
	"""
	:param value: The value to check
	:return: Whether the value passes a runtime 'str' type check
	"""

	try:
		typeguard.check_type(value, str)
		return True
	except typeguard.TypeCheckError:
		return False


def is_symbol(value: typing.Any) -> bool:
	"""
	Checks whether a value can be declared as a grammar symbol
	A symbol is exactly one character which is neither whitespace, the epsilon marker, nor reserved by the grammar text format
	:param value: The value to check
	:return: Whether the value is a usable symbol
	"""

	return is_string(value) and len(value) == 1 and not value.isspace() and value != EPSILON and value not in RESERVED_SYMBOLS


def display_form(form: str) -> str:
	"""
	:param form: A sentential form or word
	:return: The form, or the epsilon marker if the form is empty
	"""

	return EPSILON if len(form) == 0 else form
