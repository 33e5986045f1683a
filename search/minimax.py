import math

from config import SEARCH, SearchConfig
from env.errors import IllegalStateError
from env.tictactoe_env import Board, Move, Player, Position


class MinimaxSearch:
    """
    Depth-limited minimax with alpha-beta pruning over immutable boards.

    Scores are from the point of view of the player to move at the root
    ("original player"): faster wins score higher, slower losses score
    less negatively, draws score 0.
    """

    def __init__(self, board: Board, config: SearchConfig = SEARCH):
        self.root_board = board
        self.config = config
        self.original_player = board.current_player
        self.nodes_searched = 0

    def best_move(self) -> Position:
        best_score = -math.inf
        best_position = None
        alpha = -math.inf
        beta = math.inf

        for position in self.root_board.empty_positions():
            child = self.root_board.make_move(Move(self.original_player, position))
            score = self.minimax(child, 0, False, alpha, beta)
            if score > best_score:
                best_score = score
                best_position = position
            # Later root siblings are pruned against the best score so far
            alpha = max(alpha, best_score)

        if best_position is None:
            raise IllegalStateError("No valid moves available")
        return best_position

    def minimax(self, board: Board, depth: int, maximizing: bool, alpha, beta):
        self.nodes_searched += 1

        winner = board.get_winner()
        if winner == self.original_player:
            return self.config.win_score - depth
        if winner is not None:
            return -self.config.win_score + depth
        if board.is_full:
            return 0
        if depth == self.config.max_depth:
            return self.evaluate_position(board, self.original_player)

        if maximizing:
            value = -math.inf
            for position in board.empty_positions():
                child = board.make_move(Move(board.current_player, position))
                value = max(value, self.minimax(child, depth + 1, False, alpha, beta))
                alpha = max(alpha, value)
                if alpha >= beta:
                    return value
            return value

        value = math.inf
        for position in board.empty_positions():
            child = board.make_move(Move(board.current_player, position))
            value = min(value, self.minimax(child, depth + 1, True, alpha, beta))
            beta = min(beta, value)
            if alpha >= beta:
                return value
        return value

    def evaluate_position(self, board: Board, player: Player) -> int:
        """Static score for a cut-off position: center and corner control only."""
        score = 0

        center = board.player_at(*Board.CENTER)
        if center is not None:
            score += self.config.center_weight if center == player else -self.config.center_weight

        for r, c in Board.CORNERS:
            occupant = board.player_at(r, c)
            if occupant is not None:
                score += self.config.corner_weight if occupant == player else -self.config.corner_weight

        return score
