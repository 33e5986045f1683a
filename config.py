from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    board_size: int = 3
    max_depth: int = 6
    win_score: int = 10
    center_weight: int = 3
    corner_weight: int = 2


SEARCH = SearchConfig()
