from time import time

import numpy as np
import matplotlib.pyplot as plt



def _getAx(ax=None):
	if ax is None:
		fig = plt.figure()
		ax = fig.add_subplot(111)
	return ax



class SearchProgress:
	"""
	Progress reporting for the bidirectional search. Call `start` before each search run, then
	call the instance with the current forward and backward frontier sizes after each expansion;
	every `every` calls the sizes are recorded (and printed when `verbose`). Each run keeps its
	own history in `runs`. With `maxStates` given, the printed line
	includes a bar showing how close the search is to its state limit.
	"""

	def __init__(self, message="", length=40, maxStates=None, every=1000, verbose=True):
		self.message = message
		self.length = length
		self.maxStates = maxStates
		self.every = max(1, every)
		self.verbose = verbose
		self.runs = []
		self.start()


	def start(self, message=None):
		if message is not None:
			self.message = message
		self.time0 = time()
		self.calls = 0
		self.forward = self.backward = 0
		# a run which recorded nothing is replaced
		if self.runs and not self.runs[-1][1]:
			self.runs.pop()
		self._history = []
		self.runs.append((self.message, self._history))


	def __call__(self, forward, backward):
		self.calls += 1
		self.forward = forward
		self.backward = backward
		if self.calls % self.every == 0:
			self._record()


	def finish(self, status):
		self._record()
		if self.verbose:
			print(f"\r{self} {status.name}", flush=True)


	def _record(self):
		self._history.append((self.calls, time() - self.time0, self.forward, self.backward))
		if self.verbose:
			self.print()


	@property
	def history(self):
		"""
		Rows of (expansions, seconds, forward states, backward states)
		"""
		return self._asArray(self._history)

	@staticmethod
	def _asArray(history):
		if not history:
			return np.empty((0, 4))
		return np.array(history, dtype=float)


	def __str__(self):
		counts = f"fwd={self.forward} bwd={self.backward} ({time() - self.time0:.1f}s)"
		if self.maxStates is None:
			return f"{self.message}{counts}"
		cnt = min(self.length, round((self.forward + self.backward) * self.length / self.maxStates))
		return f"{self.message}[{'#'*cnt}{'-'*(self.length-cnt)}] {counts}"

	def print(self):
		print(f"\r{self}", end="", flush=True)


	def plot(self, ax=None):
		"""
		Draws the growth of both frontiers, for each recorded run
		"""
		ax = _getAx(ax)
		for message, history in self.runs:
			history = self._asArray(history)
			name = message.strip(": ") or "search"
			ax.semilogy(history[:, 0], np.maximum(history[:, 2], 1), label=f"{name} forward")
			ax.semilogy(history[:, 0], np.maximum(history[:, 3], 1), label=f"{name} backward")
		ax.set_xlabel("expanded positions")
		ax.set_ylabel("reached positions")
		ax.grid(True)
		ax.legend()
		return ax
