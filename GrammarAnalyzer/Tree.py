from __future__ import annotations

import typing

from . import Exceptions
from . import Misc


class Tree:
	"""
	Class representing an n-ary tree of labeled nodes
	Used both for derivation traces (production labels 'X -> rhs') and for general exploration trees (alternating production and symbol labels)
	Each node exclusively owns its children; there are no parent references
	"""

	def __init__(self, label: str, terminal: bool = False, children: typing.Optional[typing.Iterable[Tree]] = None):
		"""
		Class representing an n-ary tree of labeled nodes
		- Constructor -
		:param label: The node label, either a bare symbol or a production description
		:param terminal: Whether this node holds a terminal symbol
		:param children: The initial children of this node
		:raises InvalidArgumentException: If 'label' is not a string
		:raises TypeError: If one or more children is not a Tree instance
		"""

		Misc.raise_ifn(isinstance(label, str), Exceptions.InvalidArgumentException(Tree.__init__, 'label', type(label), (str,)))
		self.__label__: str = str(label)
		self.__terminal__: bool = bool(terminal)
		self.__children__: list[Tree] = [] if children is None else list(children)
		Misc.raise_ifn(all(isinstance(child, Tree) for child in self.__children__), TypeError('One or more tree children is not a Tree instance'))

	def __eq__(self, other: Tree) -> bool:
		return isinstance(other, Tree) and self.__label__ == other.__label__ and self.__terminal__ == other.__terminal__ and self.__children__ == other.__children__

	__hash__ = None

	def __iter__(self) -> typing.Iterator[Tree]:
		"""
		Iterates this tree in pre-order
		:return: An iterator over every node, starting with this one
		"""

		stack: list[Tree] = [self]

		while len(stack) > 0:
			node: Tree = stack.pop()
			yield node
			stack.extend(reversed(node.__children__))

	def __repr__(self) -> str:
		return f'<Tree[{self.__label__}] instance @ {hex(id(self)).upper()}>'

	def __str__(self) -> str:
		return self.render()

	def add_child(self, child: Tree | str, terminal: bool = False) -> Tree:
		"""
		Appends a child to this node
		If 'child' is a string, a new node is created with that label
		:param child: The child tree or the label of a new child
		:param terminal: Whether a newly created child holds a terminal symbol; ignored for Tree instances
		:return: The appended child
		:raises InvalidArgumentException: If 'child' is neither a Tree nor a string
		"""

		if isinstance(child, str):
			child = Tree(child, terminal)

		Misc.raise_ifn(isinstance(child, Tree), Exceptions.InvalidArgumentException(Tree.add_child, 'child', type(child), (Tree, str)))
		Misc.raise_if(child is self, ValueError('Tree cannot be its own child'))
		self.__children__.append(child)
		return child

	def render(self) -> str:
		"""
		Renders this tree horizontally with box-drawing connectors
		Every label is written on its own line; the last child of a node is joined with '└── ', all others with '├── '
		:return: The multi-line rendering, each line terminated by a newline
		"""

		lines: list[str] = []

		def _render(node: Tree, prefix: str, child_prefix: str) -> None:
			lines.append(f'{prefix}{node.__label__}\n')
			last: int = len(node.__children__) - 1

			for i, child in enumerate(node.__children__):
				if i < last:
					_render(child, child_prefix + '├── ', child_prefix + '│   ')
				else:
					_render(child, child_prefix + '└── ', child_prefix + '    ')

		_render(self, '', '')
		return ''.join(lines)

	def to_dict(self) -> dict[str, typing.Any]:
		"""
		Converts this tree into nested plain data for presentation layers
		:return: A mapping with 'label', 'terminal' and 'children' keys
		"""

		return {'label': self.__label__, 'terminal': self.__terminal__, 'children': [child.to_dict() for child in self.__children__]}

	@property
	def label(self) -> str:
		"""
		:return: This node's label
		"""

		return self.__label__

	@property
	def children(self) -> tuple[Tree, ...]:
		"""
		:return: This node's children in insertion order
		"""

		return tuple(self.__children__)

	@property
	def terminal(self) -> bool:
		"""
		:return: Whether this node holds a terminal symbol
		"""

		return self.__terminal__

	@property
	def leaf(self) -> bool:
		"""
		:return: Whether this node has no children
		"""

		return len(self.__children__) == 0

	@property
	def depth(self) -> int:
		"""
		:return: The number of edges on the longest path from this node to a leaf
		"""

		return 0 if len(self.__children__) == 0 else 1 + max(child.depth for child in self.__children__)

	@property
	def size(self) -> int:
		"""
		:return: The number of nodes in this tree
		"""

		return sum(1 for _ in self)
