import numpy as np

from cubes import Configuration, invertLabel
from resources import _getAx



class MoveSequence:
	"""
	Represents a sequence of domino cube positions and the moves (labels) between them
	"""


	def __init__(self, cube, positions=None, moves=None):
		if positions is None:
			positions = np.empty((0, cube.size), dtype=np.uint8)
		if moves is None:
			moves = []
		self.cube = cube
		self.positions = np.array(positions, dtype=np.uint8)
		self.moves = list(moves)



	@staticmethod
	def fromMoves(moves, cube, start=None):
		"""
		Builds a `MoveSequence` by replaying `moves` from `start` (solved cube by default)
		"""
		position = cube.getSolvedPosition() if start is None else Configuration(start).copy()
		positions = np.empty((len(moves)+1, len(position)), dtype=np.uint8)
		positions[0, :] = position.position
		for i, label in enumerate(moves, start=1):
			position.apply(cube.moves[label])
			positions[i, :] = position.position
		return MoveSequence(
			cube = cube,
			positions = positions,
			moves = moves,
		)


	def __len__(self):
		return len(self.moves)

	def __str__(self):
		return " ".join(self.moves)


	def getPosition(self, i):
		return Configuration(self.positions[i, :])

	@property
	def start(self):
		return self.getPosition(0)

	@property
	def end(self):
		return self.getPosition(-1)


	def check(self):
		"""
		Checks that positions correspond to moves
		"""
		assert len(self.positions) == len(self.moves)+1
		position = self.start
		for i, label in enumerate(self.moves, start=1):
			position.apply(self.cube.moves[label])
			assert (position.position == self.positions[i, :]).all(), \
			       f"Position {i} does not follow from move {label}"
		return self


	def isSolved(self, anywhere=False):
		"""
		Checks if the sequence ends with a solved position,
		or contains a solved position when `anywhere`
		"""
		if anywhere:
			return self.getSolvedIndex() >= 0
		return self.cube.isSolved(self.end)


	def getSolvedIndex(self):
		"""
		Finds index of the first position in sequence which is solved.
		Returns -1 if no solved position found.
		"""
		for i in range(len(self.positions)):
			if self.cube.isSolved(self.getPosition(i)):
				return i
		return -1


	def getScores(self):
		return np.array([self.cube.getScore(self.getPosition(i)) for i in range(len(self.positions))])



	## Sequence transforms #########################################################################


	def invert(self):
		"""
		Inverts the order of positions and moves in the sequence.
		Returns a new MoveSequence, self is unchanged.
		"""
		return MoveSequence(
			cube = self.cube,
			positions = self.positions[::-1, ...],
			moves = [invertLabel(m) for m in self.moves[::-1]],
		)


	def concat(self, other):
		"""
		Appends `other`, which has to start where self ends.
		Returns a new MoveSequence, self is unchanged.
		"""
		assert (self.positions[-1, :] == other.positions[0, :]).all(), \
		       "Sequences do not follow each other"
		return MoveSequence(
			cube = self.cube,
			positions = np.concatenate((self.positions, other.positions[1:, :]), axis=0),
			moves = self.moves + other.moves,
		)



	## Plotting ####################################################################################


	def plot(self, ax=None):
		"""
		Plots the number of solved stickers after each move
		"""
		ax = _getAx(ax)
		scores = self.getScores()
		ax.plot(np.arange(len(scores)), scores, marker="o")
		ax.set_xticks(np.arange(len(scores)))
		ax.set_xticklabels(["start"] + self.moves, rotation=45)
		ax.set_ylim(0, self.cube.size)
		ax.set_ylabel("stickers in place")
		ax.grid(True)
		return ax
