from __future__ import annotations

import re
import typing
import typeguard


Scalar = bool | int | float | str | None


class KVP:
	"""
	Class providing parsing capabilities for the KeyValuePair (KVP) data storage format

	Each line is either 'key=value;value', a namespace opening '>>name' or a namespace closing '<<'
	A value may end with a format marker: '&B' boolean, '&I' integer, '&F' float, '&S' string; unmarked values are strings
	'%;', '%&' and '%%' escape a literal separator, marker or percent sign; an empty value is None
	"""

	__ESCAPED__: str = '%;&'
	__ESCAPE__: re.Pattern = re.compile(r'[%;&]')
	__UNESCAPE__: re.Pattern = re.compile(r'%([%;&])')

	@classmethod
	def decode(cls, data: str, root_name: str = None) -> KVP:
		"""
		Parses a string into a KVP object
		:param data: The data to parse
		:param root_name: The name of the root object
		:return: A new KVP object
		:raises KVPDecodeError: If an error occurred during decode
		"""

		namespaces: list[tuple[str, dict[str, typing.Any]]] = [(root_name, {})]

		for line_number, raw in enumerate(data.split('\n'), start=1):
			line: str = raw.strip()

			if len(line) == 0:
				continue
			elif line.startswith('>>'):
				name: str = line[2:].strip()

				if len(name) == 0:
					raise KVPDecodeError(f'Namespace has no name - LINE.{line_number} {line}')

				namespaces.append((name, {}))
			elif line.startswith('<<'):
				if len(namespaces) == 1:
					raise KVPDecodeError(f'No matching namespace to close - LINE.{line_number} {line}')

				name, mapping = namespaces.pop()
				namespaces[-1][1][name] = mapping
			elif '=' in line:
				index: int = line.index('=')
				key: str = line[:index].strip()

				if len(key) == 0:
					raise KVPDecodeError(f'Key is empty - LINE.{line_number} {line}')

				namespaces[-1][1][key] = KVP.__decode_values__(line_number, line, line[index + 1:].strip())
			else:
				raise KVPDecodeError(f'Line is neither a namespace declaration nor a key value pair - LINE.{line_number} {line}')

		if len(namespaces) > 1:
			raise KVPDecodeError(f'Unclosed namespace: \'{namespaces[-1][0]}\'')

		return cls(root_name, namespaces[0][1])

	@staticmethod
	def __decode_values__(line_number: int, line: str, value: str) -> list[Scalar]:
		values: list[Scalar] = []
		token: list[str] = []
		index: int = 0

		while index < len(value):
			char: str = value[index]

			if char == '%' and index + 1 < len(value) and value[index + 1] in KVP.__ESCAPED__:
				token.append(value[index:index + 2])
				index += 2
				continue
			elif char == ';':
				values.append(KVP.__decode_value__(line_number, line, ''.join(token).strip()))
				token.clear()
			else:
				token.append(char)

			index += 1

		values.append(KVP.__decode_value__(line_number, line, ''.join(token).strip()))
		return values

	@staticmethod
	def __decode_value__(line_number: int, line: str, value: str) -> Scalar:
		format_start: typing.Optional[int] = None
		index: int = 0

		while index < len(value):
			if value[index] == '%' and index + 1 < len(value) and value[index + 1] in KVP.__ESCAPED__:
				index += 2
				continue
			elif value[index] == '&':
				format_start = index

			index += 1

		if format_start is None:
			return None if len(value) == 0 else KVP.__UNESCAPE__.sub(r'\1', value)

		formatter: str = value[format_start + 1:]
		value = KVP.__UNESCAPE__.sub(r'\1', value[:format_start])

		if len(value) == 0:
			raise KVPDecodeError(f'Format on empty value - LINE.{line_number} {line}')
		elif formatter == 'B':
			if value == 'true':
				return True
			elif value == 'false':
				return False

			try:
				return int(value) != 0
			except ValueError:
				raise KVPDecodeError(f'Failed to format value \'{value}\' as boolean - LINE.{line_number} {line}')
		elif formatter == 'I':
			try:
				return int(value)
			except ValueError:
				raise KVPDecodeError(f'Failed to format value \'{value}\' as integer - LINE.{line_number} {line}')
		elif formatter == 'F':
			try:
				return float(value)
			except ValueError:
				raise KVPDecodeError(f'Failed to format value \'{value}\' as float - LINE.{line_number} {line}')
		elif formatter == 'S':
			return value
		elif len(formatter) == 0:
			raise KVPDecodeError(f'No formatter specified - LINE.{line_number} {line}')
		else:
			raise KVPDecodeError(f'Formatter is invalid: \'{formatter}\'; expected one of [ B, I, F, S ] - LINE.{line_number} {line}')

	@staticmethod
	def __encode_value__(value: Scalar) -> str:
		if value is None:
			return ''
		elif isinstance(value, bool):
			return f'{"true" if value else "false"}&B'
		elif isinstance(value, int):
			return f'{value}&I'
		elif isinstance(value, float):
			return f'{value}&F'
		elif isinstance(value, str):
			return KVP.__ESCAPE__.sub(r'%\g<0>', value)
		else:
			raise KVPEncodeError(f'Unencodable type: \'{type(value)}\'')

	@staticmethod
	def __is_iterable__(value: typing.Any) -> bool:
		try:
			typeguard.check_type(value, typing.Iterable)
			return True
		except typeguard.TypeCheckError:
			return False

	@staticmethod
	def __is_scalar__(value: typing.Any) -> bool:
		return value is None or isinstance(value, (bool, int, float, str))

	def __init__(self, namespace_name: str | None, data: typing.Mapping[str, typing.Any]):
		"""
		Class providing parsing capabilities for the KeyValuePair (KVP) data storage format
		- Constructor -
		:param namespace_name: The namespace name, None for a root object
		:param data: The data to store; values are scalars, iterables of scalars, mappings or KVP objects
		:raises TypeError: If the data or one of its values is of an invalid type
		"""

		if not isinstance(data, typing.Mapping):
			raise TypeError(f'KVP data must be a mapping; got \'{type(data)}\'')

		self.__namespace__: str = f'KVP @ {hex(id(self))} (ROOT)' if namespace_name is None else str(namespace_name)
		self.__mapping__: dict[str, tuple[Scalar, ...] | KVP] = {}

		for key, value in data.items():
			self[str(key)] = value

	def __len__(self) -> int:
		return len(self.__mapping__)

	def __repr__(self) -> str:
		return f'<KVP[{self.__namespace__}] instance @ {hex(id(self)).upper()}>'

	def __contains__(self, item: str) -> bool:
		"""
		:param item: The mapping key
		:return: Whether the specified key exists
		"""

		return item in self.__mapping__

	def __getitem__(self, item: str) -> tuple[Scalar, ...] | KVP:
		"""
		Gets the specified mapping value
		:param item: The mapping key
		:return: The tuple of values or the nested namespace
		:raises AssertionError: If the key is not a string
		:raises KeyError: If the key does not exist
		"""

		assert isinstance(item, str), f'KVP key must be \'str\', got \'{type(item)}\''
		return self.__mapping__[item]

	def __getattr__(self, item: str) -> tuple[Scalar, ...] | KVP:
		mapping: typing.Optional[dict] = self.__dict__.get('__mapping__')

		if mapping is None or item not in mapping:
			raise AttributeError(f'KVP namespace has no key \'{item}\'')

		return mapping[item]

	def __setitem__(self, key: str, value: typing.Any) -> None:
		"""
		Sets the specified mapping key to a value
		:param key: The mapping key
		:param value: A scalar, an iterable of scalars, a mapping or a KVP object
		:raises AssertionError: If the key is not a string
		:raises TypeError: If the value cannot be stored
		"""

		assert isinstance(key, str), f'KVP key must be \'str\', got \'{type(key)}\''

		if isinstance(value, KVP):
			self.__mapping__[key] = value
		elif isinstance(value, typing.Mapping):
			self.__mapping__[key] = KVP(key, value)
		elif KVP.__is_scalar__(value):
			self.__mapping__[key] = (value,)
		elif KVP.__is_iterable__(value):
			values: tuple = tuple(value)

			if not all(KVP.__is_scalar__(x) for x in values):
				raise TypeError(f'One or more list values are not a bool, int, float, str or None - \'{values}\'')

			self.__mapping__[key] = values
		else:
			raise TypeError(f'Unstorable type: \'{type(value)}\'')

	def __delitem__(self, key: str) -> None:
		assert isinstance(key, str), f'KVP key must be \'str\', got \'{type(key)}\''
		del self.__mapping__[key]

	def __iter__(self) -> typing.Iterator[tuple[str, tuple[Scalar, ...] | KVP]]:
		yield from self.__mapping__.items()

	def get(self, key: str, default: typing.Any = None) -> tuple[Scalar, ...] | KVP | typing.Any:
		"""
		:param key: The mapping key
		:param default: The value returned if the key does not exist
		:return: The associated map value or 'default'
		"""

		return self.__mapping__.get(key, default)

	def first(self, key: str, default: typing.Any = None) -> Scalar | typing.Any:
		"""
		:param key: The mapping key
		:param default: The value returned if the key does not exist, is a namespace or holds only None
		:return: The first value stored under 'key' or 'default'
		"""

		values = self.__mapping__.get(key)

		if not isinstance(values, tuple) or len(values) == 0 or values[0] is None:
			return default

		return values[0]

	def keys(self) -> tuple[str, ...]:
		"""
		:return: The keys of this KVP map
		"""

		return tuple(self.__mapping__.keys())

	def values(self) -> tuple[tuple[Scalar, ...] | KVP, ...]:
		"""
		:return: The values of this KVP map
		"""

		return tuple(self.__mapping__.values())

	def encode(self) -> str:
		"""
		Converts this KVP object back into a string for writing
		:return: The encoded data
		:raises KVPEncodeError: If an error occurred during encode
		"""

		output: list[str] = []

		def _encode(kvp: KVP, indent: int = 0) -> None:
			tab: str = '\t' * indent

			for k, v in kvp.__mapping__.items():
				if isinstance(v, KVP):
					output.append(f'{tab}>>{k}')
					_encode(v, indent + 1)
					output.append(f'{tab}<<')
				else:
					output.append(f'{tab}{k}={";".join(KVP.__encode_value__(x) for x in v)}')

		_encode(self)
		return '\n'.join(output)

	@property
	def namespace(self) -> str:
		return self.__namespace__


class KVPDecodeError(ValueError):
	pass


class KVPEncodeError(ValueError):
	pass
