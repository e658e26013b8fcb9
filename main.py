import argparse
import sys

import matplotlib.pyplot as plt

from cubes import DominoCube, InvalidConfigurationError
from resources import SearchProgress
from solvers import DominoSolver, TwoPhaseSolver



def buildParser():
	parser = argparse.ArgumentParser(
		description="Solves a 3x3x2 (domino) cube with bidirectional breadth-first search",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Stickers are given as one string of 42 colors (r b o g w y), faces in the order
F U B D L R; the solved cube is
  rrrrrrbbbbbbbbboooooogggggggggwwwwwwyyyyyy
""",
	)
	parser.add_argument(
		"position",
		nargs="?",
		help="cube to solve (read from standard input when missing)",
	)
	parser.add_argument(
		"--scramble",
		type=int,
		metavar="N",
		help="solve the solved cube scrambled by N random moves instead",
	)
	parser.add_argument("--seed", type=int, help="random seed for --scramble")
	parser.add_argument(
		"--single-phase",
		action="store_true",
		help="search with all moves at once instead of the two-phase method",
	)
	parser.add_argument(
		"--layered",
		action="store_true",
		help="expand whole search layers, which finds shortest paths for each phase",
	)
	parser.add_argument(
		"--max-states",
		type=int,
		metavar="N",
		help="give up when the search holds more than N positions",
	)
	parser.add_argument("--verbose", "-v", action="store_true", help="print search progress")
	parser.add_argument("--plot", action="store_true", help="plot frontier growth and the solution")
	return parser



def main(argv=None):
	args = buildParser().parse_args(argv)

	cube = DominoCube()

	if args.scramble is not None:
		start, scrambleMoves = cube.scramble(args.scramble, seed=args.seed)
		if args.verbose:
			print("scramble:", " ".join(scrambleMoves))
	else:
		text = args.position if args.position is not None else sys.stdin.readline()
		try:
			start = cube.parsePosition(text)
		except InvalidConfigurationError as e:
			print(f"Invalid cube: {e}", file=sys.stderr)
			return 2

	progress = None
	if args.verbose or args.plot:
		progress = SearchProgress(maxStates=args.max_states, verbose=args.verbose)

	solverClass = DominoSolver if args.single_phase else TwoPhaseSolver
	solver = solverClass(cube, layered=args.layered, maxStates=args.max_states, progress=progress)
	if args.verbose:
		print("\ncube:", cube)
		print("solver:", solver)
		print("start:", start, "\n")

	sequence = solver.solveSequence(start)
	if sequence is None:
		print("No solution")
	else:
		print(" ".join(sequence.moves))

	if args.plot:
		progress.plot()
		if sequence is not None:
			sequence.plot()
		plt.show()

	return 0



if __name__ == "__main__":
	sys.exit(main())
