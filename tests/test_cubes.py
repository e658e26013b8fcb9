import numpy as np
import pytest

from cubes import (
	Configuration,
	DominoCube,
	InvalidConfigurationError,
	MoveType,
	applyMove,
	cloneMove,
	composeMoves,
	createComposite,
	cycleMove,
	flattenLabels,
	invertLabel,
	labelMove,
	moveOrder,
	noMove,
)

from conftest import EXAMPLE_START, SOLVED



## Configuration ###################################################################################


def test_cycle_moves_stickers_forward():
	position = Configuration("abcd")
	position.applyCycle([0, 1, 2])
	assert str(position) == "cabd"


def test_configuration_equality_is_structural():
	a = Configuration("rbog")
	b = Configuration(b"rbog")
	assert a == b
	assert a is not b
	assert hash(a) == hash(b)
	assert { a: 1 }[b] == 1
	assert a != Configuration("rbgo")


def test_applied_leaves_original_untouched(cube):
	solved = cube.getSolvedPosition()
	turned = solved.applied(cube.moves["U"])
	assert str(solved) == SOLVED
	assert turned != solved


def test_projection_merges_colors(cube):
	projected = cube.project(SOLVED)
	assert str(projected) == "rrrrrrbbbbbbbbbrrrrrrbbbbbbbbbwwwwwwyyyyyy"


def test_projection_is_idempotent(cube):
	for text in (SOLVED, EXAMPLE_START):
		once = cube.project(text)
		assert cube.project(once) == once


## Moves ###########################################################################################


def test_identity_does_nothing(distinctPosition):
	assert distinctPosition.applied(noMove) == distinctPosition


def test_composite_applies_left_then_right(cube, distinctPosition):
	for a in cube.labels:
		for b in cube.labels:
			composite = composeMoves(cube.moves[a], cube.moves[b])
			expected = distinctPosition.applied(cube.moves[a]).apply(cube.moves[b])
			assert distinctPosition.applied(composite) == expected


def test_composition_is_not_commutative():
	position = Configuration("abc")
	a = cycleMove([0, 1])
	b = cycleMove([1, 2])
	assert position.applied(composeMoves(a, b)) != position.applied(composeMoves(b, a))


def test_move_then_inverse_is_identity(cube, distinctPosition):
	for label in cube.labels:
		inverse = cube.invertMove(label)
		position = distinctPosition.applied(cube.moves[label]).apply(cube.moves[inverse])
		assert position == distinctPosition, label


def test_half_turns_are_involutions(cube, distinctPosition):
	assert sorted(cube.halfTurnMoves) == ["B2", "D2", "F2", "L2", "R2", "U2"]
	for label in cube.halfTurnMoves:
		move = cube.moves[label]
		assert distinctPosition.applied(move) != distinctPosition
		assert distinctPosition.applied(move).apply(move) == distinctPosition


def test_quarter_turn_variants(cube, distinctPosition):
	u = cube.moves["U"]
	twice = distinctPosition.applied(u).apply(u)
	assert twice == distinctPosition.applied(cube.moves["U2"])
	assert twice.applied(u) == distinctPosition.applied(cube.moves["U'"])
	assert twice.applied(u).apply(u) == distinctPosition


def test_catalog_has_ten_moves(cube):
	assert sorted(cube.labels) == sorted(["L2", "R2", "F2", "B2", "U", "U2", "U'", "D", "D2", "D'"])


def test_clone_is_equal_but_independent(cube, distinctPosition):
	original = cube.moves["U'"]
	clone = cloneMove(original)
	assert clone == original
	assert clone.label == "U'"
	assert clone is not original
	assert clone.param[0] is not original.param[0]
	assert distinctPosition.applied(clone) == distinctPosition.applied(original)


def test_flatten_stops_at_labeled_nodes(cube):
	assert flattenLabels(cube.moves["U2"]) == ["U2"]
	chained = composeMoves(cube.moves["U"], composeMoves(cube.moves["L2"], cube.moves["D'"]))
	assert flattenLabels(chained) == ["U", "L2", "D'"]
	assert flattenLabels(labelMove(chained, "X")) == ["X"]
	assert flattenLabels(createComposite(cycleMove([0, 1]), cycleMove([2, 3]))) == []


def test_compose_does_not_label():
	move = composeMoves(cycleMove([0, 1], "a"), cycleMove([1, 2], "b"))
	assert move.type == MoveType.composite
	assert move.label is None


@pytest.mark.parametrize("label, inverse", [
	("U", "U'"),
	("U'", "U"),
	("U2", "U2"),
	("L2", "L2"),
	("D'", "D"),
])
def test_invert_label(label, inverse):
	assert invertLabel(label) == inverse


def test_compiled_orders_match_move_trees(cube, distinctPosition):
	for label, move in cube.moves.items():
		order = cube.moveOrders[label]
		assert (order == moveOrder(move, cube.size)).all()
		assert distinctPosition.permuted(order) == distinctPosition.applied(move)


def test_cycle_contract_is_checked():
	with pytest.raises(AssertionError):
		cycleMove([3, 3])
	with pytest.raises(IndexError):
		applyMove(cycleMove([0, 50]), np.arange(42))


## Catalog helpers #################################################################################


def test_parse_position_accepts_cube(cube):
	position = cube.parsePosition(EXAMPLE_START + "\n")
	assert str(position) == EXAMPLE_START


@pytest.mark.parametrize("text", [
	"",
	SOLVED[:-1],
	SOLVED + "r",
	SOLVED[:-1] + "x",
	"r" + SOLVED[1:-1] + "R",
])
def test_parse_position_refuses_malformed(cube, text):
	with pytest.raises(InvalidConfigurationError):
		cube.parsePosition(text)


def test_parse_position_allows_wrong_color_counts(cube):
	# an unsolvable but well-formed cube is left for the solver to reject
	text = SOLVED[:15] + "r" + SOLVED[16:]
	assert str(cube.parsePosition(text)) == text


def test_apply_moves_replays_labels(cube):
	position = cube.applyMoves(SOLVED, ["U", "L2", "U'"])
	assert position != cube.getSolvedPosition()
	assert str(position) != SOLVED
	# a conjugate of a half turn undoes itself
	assert cube.applyMoves(position, ["U", "L2", "U'"]) == cube.getSolvedPosition()
	with pytest.raises(KeyError):
		cube.applyMoves(SOLVED, ["X"])


def test_scramble_is_reproducible(cube):
	first, firstMoves = cube.scramble(12, seed=3)
	second, secondMoves = cube.scramble(12, seed=3)
	assert first == second
	assert firstMoves == secondMoves
	assert cube.applyMoves(SOLVED, firstMoves) == first


def test_score_counts_solved_stickers(cube):
	assert cube.getScore(SOLVED) == cube.size
	assert cube.getScore(cube.applyMoves(SOLVED, ["L2"])) < cube.size
