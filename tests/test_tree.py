"""
Search tree and zipper: descent / ascent discipline and the MCTS phases.
"""

import random

import pytest

from c4mcts.config import COLUMNS
from c4mcts.core.move import EMPTY_MOVE, Move
from c4mcts.core.position import Position
from c4mcts.errors import NoLegalMovesError
from c4mcts.search.mcts import simulate
from c4mcts.search.tree import Node, Tree, Zipper
from c4mcts.types import Outcome

from conftest import cell_bit


def _root_with_children(n: int) -> Zipper:
    root = Node(EMPTY_MOVE)
    for c in range(n):
        root.children.append(Node(Move(cell_bit(0, c))))
    return Zipper(root)


# =============================================================================
# Zipper
# =============================================================================


def test_descend_and_ascend_restores_child_order():
    z = _root_with_children(4)
    before = list(z.node.children)

    z.child(2)
    assert z.node is before[2]
    assert z.has_parent()
    assert z.depth == 1
    assert len(z.path[0][0].children) == 3

    z.parent()
    assert not z.has_parent()
    assert z.node.children == before
    assert all(a is b for a, b in zip(z.node.children, before))


def test_nested_descent_rebuilds_whole_path():
    z = _root_with_children(3)
    grandchildren = [Node(Move(cell_bit(1, c))) for c in range(3)]
    z.node.children[1].children.extend(grandchildren)
    root = z.node

    z.child(1).child(0)
    assert z.depth == 2
    assert z.node is grandchildren[0]

    z.root()
    assert z.node is root
    assert z.depth == 0
    assert z.node.children[1].children == grandchildren


# =============================================================================
# Phases
# =============================================================================


def test_select_stops_at_incomplete_root():
    tree = Tree()
    p = Position()
    tree.head.select(p, rounds=1)
    assert tree.head.node is tree.root
    assert tree.root.visits == 2
    assert p == Position()


def test_expand_takes_next_untried_move_in_order():
    tree = Tree()
    p = Position()
    for expected_col in range(3):
        z = tree.head.expand(p)
        assert z.depth == 1
        assert z.node.move.column == expected_col
        assert z.node.visits == 1
        assert z.node.reward == 0.0
        z.backpropagate(p, Outcome.DRAWN)
        assert p == Position()
    assert [c.move.column for c in tree.root.children] == [0, 1, 2]


def test_expand_leaves_terminal_focus_alone(drawn_board):
    tree = Tree()
    z = tree.head.expand(drawn_board)
    assert z.depth == 0
    assert tree.root.children == []


def test_select_descends_to_best_ucb_child():
    z = _root_with_children(COLUMNS)
    # child 5 stored a loss for its mover's opponent: best for the parent
    z.node.children[5].reward = -1.0
    p = Position()

    z.select(p, rounds=10)

    assert z.depth == 1
    assert z.node.move.column == 5
    assert z.node.visits == 2
    assert p.yellow == cell_bit(0, 5)
    assert p.turn == "red"


def test_select_ties_go_to_first_child():
    z = _root_with_children(COLUMNS)
    p = Position()
    z.select(p, rounds=5)
    assert z.node.move.column == 0


def test_backpropagate_flips_outcome_per_level_and_restores_position():
    tree = Tree()
    p = Position()
    z = tree.head
    # fill the root so the next select descends
    for _ in range(COLUMNS):
        z.expand(p)
        z.backpropagate(p, Outcome.DRAWN)

    z.select(p, rounds=COLUMNS + 1)
    assert z.depth == 1
    first = z.node
    z.expand(p)
    assert z.depth == 2
    leaf = z.node

    z.backpropagate(p, Outcome.WON)
    assert z.depth == 0
    assert p == Position()
    assert leaf.reward == 1.0
    assert first.reward == -1.0
    assert tree.root.reward == 1.0


def test_one_round_leaves_scratch_position_untouched(vertical_threat):
    rng = random.Random(4)
    tree = Tree()
    p = vertical_threat.copy()
    for rounds in range(1, 50):
        z = tree.head
        z.select(p, rounds)
        z.expand(p)
        outcome = simulate(p, rng)
        z.backpropagate(p, outcome)
        assert z.depth == 0
        assert p == vertical_threat


# =============================================================================
# Reading the result
# =============================================================================


def test_best_prefers_highest_expected_and_first_on_ties():
    tree = Tree(_root_with_children(4))
    kids = tree.root.children
    kids[1].reward, kids[1].visits = 3.0, 4
    kids[3].reward, kids[3].visits = 3.0, 4
    kids[2].reward, kids[2].visits = 1.0, 4
    assert tree.best().column == 1


def test_flip_root_perspective_negates_children_once():
    tree = Tree(_root_with_children(2))
    tree.root.children[0].reward = 2.0
    tree.root.children[1].reward = -1.0
    tree.flip_root_perspective()
    assert [c.reward for c in tree.root.children] == [-2.0, 1.0]
    assert tree.best().column == 1


def test_best_on_empty_root_raises():
    with pytest.raises(NoLegalMovesError):
        Tree().best()


def test_outcome_negation():
    assert -Outcome.WON is Outcome.LOST
    assert -Outcome.LOST is Outcome.WON
    assert -Outcome.DRAWN is Outcome.DRAWN
    assert Outcome.WON.reward == 1.0
    assert Outcome.LOST.reward == -1.0
    assert Outcome.DRAWN.reward == 0.0
