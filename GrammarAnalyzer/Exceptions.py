import typing
import types


class InvalidArgumentException(TypeError):
	"""
	[InvalidArgumentException(TypeError)] - Exception representing an invalid type passed to a parameter
	"""

	def __init__(self, caller: typing.Callable | types.FunctionType | types.MethodType = None, parameter_name: str = None, argument_type: type = None, parameter_types: typing.Iterable[type | str] = None):
		"""
		[InvalidArgumentException(TypeError)] - Exception representing an invalid type passed to a parameter
		- Constructor -
		:param caller: (CALLABLE) The callable that raised this exception
		:param parameter_name: (str) The name of the parameter
		:param argument_type: (type) The type of the argument passed in
		:param parameter_types: (ITERABLE[type]) The types this parameter accepts or the associated type annotation if None
		"""

		if caller is None or parameter_name is None or argument_type is None:
			super().__init__()
			return

		annotations: dict[str, typing.Any] = getattr(caller, '__annotations__', {})

		if parameter_types is not None:
			expected: tuple[str, ...] = tuple(f"'{x.__name__ if isinstance(x, type) else x}'" for x in parameter_types)
		elif parameter_name in annotations:
			expected: tuple[str, ...] = (f"'{annotations[parameter_name]}'",)
		else:
			expected: tuple[str, ...] = ('<UNKNOWN>',)

		type_list: str = expected[0] if len(expected) == 1 else f'either {", ".join(expected[:-1])} or {expected[-1]}'
		super().__init__(f'{caller.__qualname__.replace(".", "::")} - parameter \'{parameter_name}\' must be {type_list}; got \'{argument_type}\'')


class GrammarDefinitionError(ValueError):
	"""
	[GrammarDefinitionError(ValueError)] - Exception representing a rejected terminal, nonterminal, start symbol or production
	"""

	def __init__(self, what: str = ''):
		"""
		[GrammarDefinitionError(ValueError)] - Exception representing a rejected terminal, nonterminal, start symbol or production
		- Constructor -
		:param what: The message
		"""

		super().__init__(what)


class GrammarDecodeError(ValueError):
	"""
	[GrammarDecodeError(ValueError)] - Exception representing malformed grammar text
	"""

	def __init__(self, what: str = '', line_number: typing.Optional[int] = None):
		"""
		[GrammarDecodeError(ValueError)] - Exception representing malformed grammar text
		- Constructor -
		:param what: The message
		:param line_number: The 1-based line the error occurred on, if known
		"""

		super().__init__(what if line_number is None else f'{what} - LINE.{line_number}')
		self.line_number: typing.Optional[int] = line_number
