from collections import namedtuple
from enum import Enum

import numpy as np



# a type for transforms of a cube position; moves are immutable trees, so sub-moves can be
# shared between composites without copying
MoveType = Enum("MoveType", ["none", "cycle", "composite"])
Move = namedtuple("Move", ["type", "param", "label"], defaults=[None])

noMove = Move(MoveType.none, None)



class InvalidConfigurationError(ValueError):
	"""
	Raised when a cube position given by the user is malformed
	(wrong length or unknown colors)
	"""



## Moves ###########################################################################################


def cycleMove(cycle, label=None):
	"""
	A move rotating stickers along `cycle`: the sticker at `cycle[0]` goes to `cycle[1]`,
	the one at `cycle[1]` to `cycle[2]`, ..., the last one to `cycle[0]`
	"""
	cycle = tuple(int(i) for i in cycle)
	assert len(cycle) >= 2, "A cycle needs at least two positions"
	assert len(set(cycle)) == len(cycle), f"Repeated position in cycle {cycle}"
	return Move(MoveType.cycle, cycle, label)


def composeMoves(left, right):
	"""
	Unlabeled composite doing `left` first, then `right`
	"""
	return Move(MoveType.composite, (left, right))


def createComposite(*moves):
	if not moves:
		return noMove
	result = moves[0]
	for move in moves[1:]:
		result = composeMoves(result, move)
	return result


def labelMove(move, label):
	return move._replace(label=label)


def cloneMove(move):
	"""
	Rebuilds the whole move tree; the clone is equal to `move` but shares no nodes with it
	"""
	if move.type == MoveType.composite:
		left, right = move.param
		return Move(move.type, (cloneMove(left), cloneMove(right)), move.label)
	if move.type == MoveType.cycle:
		return Move(move.type, tuple(move.param), move.label)
	if move.type == MoveType.none:
		return Move(move.type, None, move.label)
	raise ValueError(f"Unknown move type: {move.type}")


def applyMove(move, position):
	"""
	Applies `move` to a numpy `position` array in place, returns the array
	"""
	if move.type == MoveType.none:
		pass
	elif move.type == MoveType.cycle:
		cycle = np.asarray(move.param)
		position[cycle] = position[np.roll(cycle, 1)]
	elif move.type == MoveType.composite:
		left, right = move.param
		applyMove(left, position)
		applyMove(right, position)
	else:
		raise ValueError(f"Unknown move type: {move.type}")
	return position


def flattenLabels(move):
	"""
	Lists labels of the moves `move` consists of, left to right.
	A labeled node is reported as a whole, without looking inside,
	so "U2" stays "U2" although it is made of two "U" turns.
	"""
	if move.label is not None:
		return [move.label]
	if move.type == MoveType.composite:
		left, right = move.param
		return flattenLabels(left) + flattenLabels(right)
	return []


def invertLabel(label):
	if len(label) > 1 and label[1] == "2":
		return label
	if len(label) > 1:
		return label[:1]
	return label + "'"


def moveOrder(move, size):
	"""
	Compiles `move` into an index array `order` such that `position[order]`
	equals the position after the move
	"""
	return applyMove(move, np.arange(size))



## Cube positions ##################################################################################


class Configuration:
	"""
	A cube position: a fixed-length sequence of one-letter colors, stored as a numpy array
	of ASCII codes. Compared and hashed by value so it can be used as a dictionary key.
	"""

	def __init__(self, symbols):
		if isinstance(symbols, Configuration):
			symbols = symbols.position
		if isinstance(symbols, str):
			symbols = symbols.encode("ascii")
		if isinstance(symbols, bytes):
			self.position = np.frombuffer(symbols, dtype=np.uint8).copy()
		else:
			self.position = np.array(symbols, dtype=np.uint8)

	def key(self):
		return self.position.tobytes()

	def __eq__(self, other):
		if not isinstance(other, Configuration):
			return NotImplemented
		return self.key() == other.key()

	def __hash__(self):
		return hash(self.key())

	def __len__(self):
		return len(self.position)

	def __str__(self):
		return self.key().decode("ascii")

	def __repr__(self):
		return f"{self.__class__.__name__}({str(self)!r})"

	def copy(self):
		return Configuration(self.position.copy())


	def applyCycle(self, cycle):
		applyMove(cycleMove(cycle), self.position)
		return self

	def apply(self, move):
		applyMove(move, self.position)
		return self

	def applied(self, move):
		return self.copy().apply(move)

	def permuted(self, order):
		return Configuration(self.position[order])


	def project(self, mapping):
		"""
		Merges colors: every color found in `mapping` is replaced by the color it maps to
		"""
		table = np.arange(256, dtype=np.uint8)
		for color, representative in mapping.items():
			table[ord(color)] = ord(representative)
		return Configuration(table[self.position])



## The cube ########################################################################################


class DominoCube:
	"""
	A virtual 3×3×2 (domino) cube with its catalog of moves
	"""

	# Sticker numbering (faces F U B D L R, colors r b o g w y when solved):
	#
	#                15 16 17
	#                18 19 20
	#
	#                06 07 08
	#                09 10 11
	#                12 13 14
	#
	#      30 31 32  00 01 02  36 37 38
	#      33 34 35  03 04 05  39 40 41
	#
	#                21 22 23
	#                24 25 26
	#                27 28 29
	#
	# Each face turn is a list of sticker cycles. L, R, F and B can only be turned by 180deg,
	# U and D by 90deg.
	faceCycles = {
		"L": [(30, 35), (31, 34), (32, 33), (3, 18), (0, 15), (6, 21), (9, 24), (12, 27)],
		"R": [(36, 41), (37, 40), (38, 39), (5, 20), (2, 17), (14, 29), (11, 26), (8, 23)],
		"F": [(0, 5), (1, 4), (2, 3), (12, 23), (13, 22), (14, 21), (32, 39), (35, 36)],
		"B": [(15, 20), (16, 19), (17, 18), (6, 29), (7, 28), (8, 27), (30, 41), (33, 38)],
		"U": [(6, 8, 14, 12), (7, 11, 13, 9), (0, 30, 20, 36), (1, 31, 19, 37), (2, 32, 18, 38)],
		"D": [(21, 23, 29, 27), (22, 26, 28, 24), (3, 39, 17, 33), (4, 40, 16, 34), (5, 41, 15, 35)],
	}
	halfTurnFaces = ("L", "R", "F", "B")

	solvedPosition = "rrrrrrbbbbbbbbboooooogggggggggwwwwwwyyyyyy"
	alphabet = "rbogwy"

	# colors merged in the first solving phase
	projection = {"o": "r", "g": "b"}


	def __init__(self):
		self.size = len(self.solvedPosition)
		for face, cycles in self.faceCycles.items():
			for cycle in cycles:
				assert all(0 <= i < self.size for i in cycle), f"Sticker out of range in face {face}"
		assert not set(self.projection) & set(self.projection.values()), \
		       "Projection should map to colors which are not merged themselves"

		self.moves = self._buildMoves()
		self.labels = list(self.moves)
		self.moveOrders = { label: moveOrder(move, self.size) for label, move in self.moves.items() }
		self.halfTurnMoves = [label for label in self.labels if label[1:] == "2"]

		for label in self.labels:
			assert self.invertMove(label) in self.moves, f"Move {label} has no inverse"


	def __str__(self):
		return f"{self.__class__.__name__}(moves={' '.join(self.labels)})"


	def _buildMoves(self):
		moves = {}
		for face, cycles in self.faceCycles.items():
			turn = createComposite(*[cycleMove(c) for c in cycles])
			if face in self.halfTurnFaces:
				moves[face + "2"] = labelMove(turn, face + "2")
			else:
				moves[face] = labelMove(turn, face)
				moves[face + "2"] = labelMove(createComposite(turn, turn), face + "2")
				moves[face + "'"] = labelMove(createComposite(turn, turn, turn), face + "'")
		return moves


	## Accessing cube state ########################################################################

	def getSolvedPosition(self):
		return Configuration(self.solvedPosition)

	def parsePosition(self, text):
		"""
		Converts user input to a `Configuration`, refusing anything which is not a domino cube
		"""
		if isinstance(text, Configuration):
			text = str(text)
		text = text.strip()
		if len(text) != self.size:
			raise InvalidConfigurationError(
				f"Expected {self.size} stickers, got {len(text)}")
		unknown = sorted(set(text) - set(self.alphabet))
		if unknown:
			raise InvalidConfigurationError(
				f"Unknown colors {''.join(unknown)!r}, expected some of {self.alphabet!r}")
		return Configuration(text)

	def isSolved(self, position):
		return str(position) == self.solvedPosition

	def getScore(self, position):
		"""
		Number of stickers already in their solved place
		"""
		solved = self.getSolvedPosition().position
		return int((Configuration(position).position == solved).sum())

	def project(self, position):
		return Configuration(position).project(self.projection)


	## Handling moves ##############################################################################

	@staticmethod
	def invertMove(label):
		return invertLabel(label)

	def subCatalog(self, labels=None):
		if labels is None:
			labels = self.labels
		return { label: self.moveOrders[label] for label in labels }

	def applyMoves(self, position, labels):
		"""
		Replays `labels` on a copy of `position`
		"""
		position = Configuration(position)
		for label in labels:
			position.apply(self.moves[label])
		return position

	def scramble(self, moves=20, seed=None, labels=None):
		"""
		Applies random moves to the solved cube. Returns the position and the moves made.
		"""
		if labels is None:
			labels = self.labels
		rng = np.random.default_rng(seed)
		made = [labels[rng.integers(len(labels))] for _ in range(moves)]
		return self.applyMoves(self.getSolvedPosition(), made), made
