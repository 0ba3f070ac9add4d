from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from c4mcts.config import EXPLORATION_C
from c4mcts.core.move import EMPTY_MOVE, Move, choose_move
from c4mcts.core.position import Position
from c4mcts.errors import NoLegalMovesError
from c4mcts.types import Outcome


@dataclass(slots=True)
class Node:
    move: Move
    visits: int = 1
    reward: float = 0.0  # banked from the perspective of the player to move after `move`
    children: List["Node"] = field(default_factory=list)

    def expected(self) -> float:
        return self.reward / self.visits


@dataclass(slots=True)
class Zipper:
    """
    Cursor over the search tree.

    The focused node is detached from its parent while focused; `path` keeps
    each ancestor (with the focused branch removed) and the index the branch
    came from, so ascending puts every node back exactly where it was.
    """

    node: Node
    path: List[Tuple[Node, int]] = field(default_factory=list)

    def has_parent(self) -> bool:
        return bool(self.path)

    @property
    def depth(self) -> int:
        return len(self.path)

    def child(self, index: int) -> "Zipper":
        focus = self.node.children.pop(index)
        self.path.append((self.node, index))
        self.node = focus
        return self

    def parent(self) -> "Zipper":
        parent, index = self.path.pop()
        parent.children.insert(index, self.node)
        self.node = parent
        return self

    def root(self) -> "Zipper":
        while self.path:
            self.parent()
        return self

    # --------- MCTS phases ---------
    def select(self, position: Position, rounds: int, exploration_c: float = EXPLORATION_C) -> "Zipper":
        """
        Descend by UCB1 while the focused node is fully expanded and the
        position is still open. Advances `position` along the way.
        """
        log_rounds = math.log(rounds)
        while True:
            node = self.node
            node.visits += 1

            if len(node.children) < position.legal_move_count() or position.is_terminal():
                return self

            best_score = -math.inf
            best_idx = 0
            for idx, child in enumerate(node.children):
                # child rewards are stored for the opponent of the player choosing here
                score = -child.reward / child.visits + exploration_c * math.sqrt(log_rounds / child.visits)
                if score > best_score:
                    best_score = score
                    best_idx = idx

            self.child(best_idx)
            position.play(self.node.move)

    def expand(self, position: Position) -> "Zipper":
        if position.is_terminal():
            return self

        # Deterministic: the next untried move in bit order, so every legal
        # move of a node gets expanded exactly once.
        idx = len(self.node.children)
        move = choose_move(position.legal_moves(), idx)
        position.play(move)
        self.node.children.append(Node(move))
        return self.child(idx)

    def backpropagate(self, position: Position, outcome: Outcome) -> "Zipper":
        while True:
            node = self.node
            if self.path:
                position.unplay(node.move)
            node.reward += outcome.reward
            outcome = -outcome

            if not self.path:
                return self
            self.parent()


@dataclass(slots=True)
class Tree:
    head: Zipper = field(default_factory=lambda: Zipper(Node(EMPTY_MOVE)))

    @property
    def root(self) -> Node:
        return self.head.node

    def best(self) -> Move:
        best_score = -math.inf
        best_move = EMPTY_MOVE
        for child in self.root.children:
            score = child.expected()
            if score > best_score:
                best_score = score
                best_move = child.move
        if best_move.is_empty():
            raise NoLegalMovesError()
        return best_move

    def best_child(self) -> Node:
        mv = self.best()
        return next(c for c in self.root.children if c.move == mv)

    def flip_root_perspective(self) -> None:
        for child in self.root.children:
            child.reward = -child.reward

    def summary(self) -> List[Tuple[int, int, float]]:
        return [
            (child.move.column, child.visits, round(child.expected(), 4))
            for child in self.root.children
        ]
