from __future__ import annotations

import datetime
import enum
import io
import typing

from . import Exceptions
from . import Misc


class LogLevel(enum.IntEnum):
	DEBUG = 10
	INFO = 20
	WARN = 30
	ERROR = 40
	CRITICAL = 50


class Logger:
	"""
	Class representing a log writer over a text stream
	"""

	def __init__(self, stream: io.IOBase, timezone: datetime.timezone = datetime.timezone.utc, *, level: LogLevel = LogLevel.DEBUG):
		"""
		Class representing a log writer over a text stream
		- Constructor -
		:param stream: The stream to write results to
		:param timezone: The timezone to log with
		:param level: The lowest level written; messages below it are dropped
		:raises InvalidArgumentException: If 'stream' is not a stream, 'timezone' is not a timezone or 'level' is not a log level
		:raises IOError: If the stream is closed or not writable
		"""

		Misc.raise_ifn(isinstance(stream, io.IOBase), Exceptions.InvalidArgumentException(Logger.__init__, 'stream', type(stream), (io.IOBase,)))
		Misc.raise_ifn(isinstance(timezone, datetime.timezone), Exceptions.InvalidArgumentException(Logger.__init__, 'timezone', type(timezone), (datetime.timezone,)))
		Misc.raise_ifn(isinstance(level, LogLevel), Exceptions.InvalidArgumentException(Logger.__init__, 'level', type(level), (LogLevel,)))

		if stream.closed:
			raise IOError('Stream is closed')
		elif not stream.writable():
			raise IOError('Target stream is not writable')

		self.__stream__: typing.Optional[io.IOBase] = stream
		self.__timezone__: datetime.timezone = timezone
		self.__level__: LogLevel = level
		self.__stream__.write('==========[ Log Opened ]==========\n\n')

	def __write__(self, level: LogLevel, msg: typing.Any) -> Logger:
		if self.__stream__ is None:
			raise IOError('Log is closed')
		elif level < self.__level__:
			return self

		timestamp: str = datetime.datetime.now(self.__timezone__).strftime('%m/%d/%Y %H:%M:%S.%f')
		self.__stream__.write(f'{timestamp} [ {self.__timezone__} ] [ {level.name} ]: {str(msg).strip()}\n')
		return self

	def __end__(self) -> io.IOBase:
		if self.__stream__ is None:
			raise IOError('Log is closed')

		stream: io.IOBase = self.__stream__
		stream.write('\n==========[ Log Closed ]==========')
		stream.flush()
		self.__stream__ = None
		return stream

	def close(self) -> None:
		"""
		Closes the log writer and its underlying stream
		Any further write is erroneous
		:raises IOError: If log is already closed
		"""

		self.__end__().close()

	def detach(self) -> None:
		"""
		Detaches the log writer
		The underlying stream is not closed
		Any further write is erroneous
		:raises IOError: If log is already closed
		"""

		self.__end__()

	def debug(self, msg: typing.Any) -> Logger:
		"""
		Writes a message to the log on DEBUG level
		:param msg: The message to write
		:return: This log writer instance
		:raises IOError: If log is closed
		"""

		return self.__write__(LogLevel.DEBUG, msg)

	def info(self, msg: typing.Any) -> Logger:
		"""
		Writes a message to the log on INFO level
		:param msg: The message to write
		:return: This log writer instance
		:raises IOError: If log is closed
		"""

		return self.__write__(LogLevel.INFO, msg)

	def warn(self, msg: typing.Any) -> Logger:
		"""
		Writes a message to the log on WARN level
		:param msg: The message to write
		:return: This log writer instance
		:raises IOError: If log is closed
		"""

		return self.__write__(LogLevel.WARN, msg)

	def error(self, msg: typing.Any) -> Logger:
		"""
		Writes a message to the log on ERROR level
		:param msg: The message to write
		:return: This log writer instance
		:raises IOError: If log is closed
		"""

		return self.__write__(LogLevel.ERROR, msg)

	def critical(self, msg: typing.Any) -> Logger:
		"""
		Writes a message to the log on CRITICAL level
		:param msg: The message to write
		:return: This log writer instance
		:raises IOError: If log is closed
		"""

		return self.__write__(LogLevel.CRITICAL, msg)

	@property
	def closed(self) -> bool:
		"""
		:return: Whether this log writer was closed or detached
		"""

		return self.__stream__ is None

	@property
	def level(self) -> LogLevel:
		"""
		:return: The lowest level this log writer records
		"""

		return self.__level__

	@level.setter
	def level(self, level: LogLevel) -> None:
		"""
		Sets the lowest level this log writer records
		:param level: The new level
		:raises InvalidArgumentException: If 'level' is not a log level
		"""

		Misc.raise_ifn(isinstance(level, LogLevel), Exceptions.InvalidArgumentException(Logger.level.fset, 'level', type(level), (LogLevel,)))
		self.__level__ = level
