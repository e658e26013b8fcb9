from collections import deque, namedtuple
from enum import Enum

import numpy as np

from cubes import Configuration, DominoCube, invertLabel
from sequences import MoveSequence



SearchStatus = Enum("SearchStatus", ["found", "exhausted", "cutoff"])
SearchResult = namedtuple("SearchResult", ["status", "forward", "backward"])



def assemblePath(forward, backward):
	"""
	Joins moves from start to the meeting point with moves from goal to the meeting point
	into moves from start to goal
	"""
	return list(forward) + [invertLabel(label) for label in reversed(backward)]



class Frontier:
	"""
	One side of the bidirectional search: positions reached from `root` (as bytes keys)
	with the moves reaching them, and a queue of positions waiting for expansion
	"""

	def __init__(self, root):
		root = Configuration(root).key()
		self.reached = { root: () }
		self.queue = deque([root])
		self.expanded = 0

	def __len__(self):
		return len(self.reached)

	def __bool__(self):
		return bool(self.queue)


	def expand(self, moveOrders, other):
		"""
		Expands the first queued position. Returns the first neighbour already reached
		by `other`, None if there is none.
		"""
		key = self.queue.popleft()
		path = self.reached[key]
		position = np.frombuffer(key, dtype=np.uint8)
		self.expanded += 1
		for label, order in moveOrders.items():
			neighbour = position[order].tobytes()
			if neighbour not in self.reached:
				self.reached[neighbour] = path + (label,)
				self.queue.append(neighbour)
			if neighbour in other.reached:
				return neighbour
		return None


	def expandLayer(self, moveOrders, other, progress=None):
		"""
		Expands all queued positions of the current depth. Returns the meeting point with
		the shortest total path, None if the layer did not meet `other`.
		"""
		best = None
		bestLength = None
		for _ in range(len(self.queue)):
			key = self.queue.popleft()
			path = self.reached[key]
			position = np.frombuffer(key, dtype=np.uint8)
			self.expanded += 1
			for label, order in moveOrders.items():
				neighbour = position[order].tobytes()
				if neighbour not in self.reached:
					self.reached[neighbour] = path + (label,)
					self.queue.append(neighbour)
				if neighbour in other.reached:
					length = len(self.reached[neighbour]) + len(other.reached[neighbour])
					if best is None or length < bestLength:
						best, bestLength = neighbour, length
			if progress is not None:
				progress(len(self), len(other))
		return best



class BidirectionalSearch:
	"""
	Breadth-first search run from both the start and the goal position at once,
	stopping when the two searches reach a common position.

	By default one position is expanded on each side in turn, which always finds a valid
	path but not necessarily the shortest one. With `layered`, whole depth layers are
	expanded (always on the smaller side), which makes the found path shortest.
	`maxStates` bounds the number of positions held by both sides together.
	"""

	def __init__(self, moveOrders, *, layered=False, maxStates=None, progress=None):
		self.moveOrders = dict(moveOrders)
		self.layered = layered
		self.maxStates = maxStates
		self.progress = progress
		self.forward = self.backward = None


	def __str__(self):
		return (f"{self.__class__.__name__}(moves={' '.join(self.moveOrders)}, "
		        f"layered={self.layered}, maxStates={self.maxStates})")


	def run(self, start, goal, message=None):
		start = Configuration(start)
		goal = Configuration(goal)
		assert len(start) == len(goal), "Start and goal should have the same number of stickers"

		self.forward = Frontier(start)
		self.backward = Frontier(goal)
		if self.progress is not None:
			self.progress.start(message)

		if start == goal:
			result = SearchResult(SearchStatus.found, (), ())
		elif self.layered:
			result = self._runLayered()
		else:
			result = self._runInterleaved()

		if self.progress is not None:
			self.progress.finish(result.status)
		return result


	def _meet(self, key):
		return SearchResult(SearchStatus.found, self.forward.reached[key], self.backward.reached[key])

	def _overLimit(self):
		return self.maxStates is not None and len(self.forward) + len(self.backward) > self.maxStates

	def _report(self):
		if self.progress is not None:
			self.progress(len(self.forward), len(self.backward))


	def _runInterleaved(self):
		fwd, bwd = self.forward, self.backward
		while fwd or bwd:
			if fwd:
				meeting = fwd.expand(self.moveOrders, bwd)
				self._report()
				if meeting is not None:
					return self._meet(meeting)
			if bwd:
				meeting = bwd.expand(self.moveOrders, fwd)
				self._report()
				if meeting is not None:
					return self._meet(meeting)
			if self._overLimit():
				return SearchResult(SearchStatus.cutoff, (), ())
		return SearchResult(SearchStatus.exhausted, (), ())


	def _runLayered(self):
		fwd, bwd = self.forward, self.backward
		# a side with an empty queue has reached everything it can, so the other side
		# would not meet anything new either
		while fwd and bwd:
			if len(fwd.queue) <= len(bwd.queue):
				meeting = fwd.expandLayer(self.moveOrders, bwd, self.progress)
			else:
				meeting = bwd.expandLayer(self.moveOrders, fwd, self._backwardProgress())
			if meeting is not None:
				return self._meet(meeting)
			if self._overLimit():
				return SearchResult(SearchStatus.cutoff, (), ())
		return SearchResult(SearchStatus.exhausted, (), ())

	def _backwardProgress(self):
		# backward layers report (backward, forward); swap to keep the progress order
		if self.progress is None:
			return None
		return lambda backward, forward: self.progress(forward, backward)



def searchPath(start, goal, moveOrders, message=None, **searchOptions):
	"""
	Runs a `BidirectionalSearch`, returns `(status, moves)` with moves leading from start to goal
	"""
	result = BidirectionalSearch(moveOrders, **searchOptions).run(start, goal, message)
	if result.status == SearchStatus.found:
		return result.status, assemblePath(result.forward, result.backward)
	return result.status, []



####################################################################################################


class CubeSolver:
	"""
	Base class for domino cube solvers
	"""

	def __init__(self, cube=None, *, layered=False, maxStates=None, progress=None):
		self.cube = cube if cube is not None else DominoCube()
		self.searchOptions = {
			"layered": layered,
			"maxStates": maxStates,
			"progress": progress,
		}
		self.lastStatus = None


	def __str__(self):
		options = ", ".join(f"{k}={v}" for k, v in self.searchOptions.items() if k != "progress")
		return f"{self.__class__.__name__}({self.cube}, {options})"


	def solve(self, start, goal=None):
		"""
		Finds moves leading from `start` to `goal` (solved cube by default).
		Returns `(success, moves)`; `moves` is empty when not successful.
		"""
		start = Configuration(start)
		goal = self.cube.getSolvedPosition() if goal is None else Configuration(goal)
		success, moves = self._findMoves(start, goal)
		return success, (moves if success else [])


	def solveSequence(self, start, goal=None):
		"""
		Like `solve`, returning the solution as a `MoveSequence` (None when not successful)
		"""
		success, moves = self.solve(start, goal)
		if not success:
			return None
		return MoveSequence.fromMoves(moves, self.cube, start)


	def _search(self, start, goal, labels, message=""):
		status, moves = searchPath(
			start, goal, self.cube.subCatalog(labels), message, **self.searchOptions)
		self.lastStatus = status
		return status == SearchStatus.found, moves


	# "abstract" methods

	def _findMoves(self, start, goal):
		"""
		Runs whatever solving strategy the specific solver implements,
		returns `(success, moves)`.
		"""
		raise NotImplementedError(f"{self.__class__.__name__}._findMoves")


####################################################################################################


class DominoSolver(CubeSolver):
	"""
	Searches for the solution directly, with the given subset of moves (all moves by default)
	"""

	def __init__(self, cube=None, labels=None, **kwargs):
		super().__init__(cube, **kwargs)
		self.labels = list(labels) if labels is not None else list(self.cube.labels)

	def _findMoves(self, start, goal):
		return self._search(start, goal, self.labels, "search: ")


####################################################################################################


class TwoPhaseSolver(CubeSolver):
	"""
	First solves the cube with some colors merged (see `DominoCube.projection`) using all moves,
	then finishes it using 180deg turns only. The second phase fails when the first one
	leaves a position which 180deg turns cannot solve.
	"""

	def __init__(self, cube=None, **kwargs):
		super().__init__(cube, **kwargs)
		self.lastIntermediate = None

	def _findMoves(self, start, goal):
		self.lastIntermediate = None
		success, firstMoves = self._search(
			self.cube.project(start), self.cube.project(goal), self.cube.labels, "phase 1: ")
		if not success:
			return False, []

		intermediate = self.cube.applyMoves(start, firstMoves)
		self.lastIntermediate = intermediate
		progress = self.searchOptions["progress"]
		if progress is not None and progress.verbose:
			print(f"after phase 1: {intermediate}")

		success, secondMoves = self._search(
			intermediate, goal, self.cube.halfTurnMoves, "phase 2: ")
		if not success:
			return False, []
		return True, firstMoves + secondMoves



def solve(startConfiguration, **options):
	"""
	Solves a domino cube given as a string of sticker colors.
	Returns `(success, moves)`; raises `InvalidConfigurationError` for malformed input.
	"""
	cube = DominoCube()
	start = cube.parsePosition(startConfiguration)
	return TwoPhaseSolver(cube, **options).solve(start)
