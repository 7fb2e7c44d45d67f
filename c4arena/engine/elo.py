from typing import Dict, Iterable, Tuple

K_FACTOR = 32
INITIAL_RATING = 1200.0


def calculate_expected_score(rating_a: float, rating_b: float) -> float:
    return 1 / (1 + 10 ** ((rating_b - rating_a) / 400))


def rating_deltas(rating_a: float, rating_b: float, winner_id: int, k_factor: float = K_FACTOR) -> Tuple[float, float]:
    """
    Rating changes for both sides after one game.
    winner_id: 1 (side A), 2 (side B), or 0 (Draw)
    """
    if winner_id == 1:
        score_a, score_b = 1.0, 0.0
    elif winner_id == 2:
        score_a, score_b = 0.0, 1.0
    elif winner_id == 0:
        score_a, score_b = 0.5, 0.5
    else:
        raise ValueError(f"Invalid winner id: {winner_id}")

    expected_a = calculate_expected_score(rating_a, rating_b)
    expected_b = calculate_expected_score(rating_b, rating_a)
    return k_factor * (score_a - expected_a), k_factor * (score_b - expected_b)


class EloTable:
    """In-memory ratings, one entry per bot name."""

    def __init__(self, names: Iterable[str] = (), k_factor: float = K_FACTOR):
        self.k_factor = k_factor
        self.ratings: Dict[str, float] = {name: INITIAL_RATING for name in names}

    def get(self, name: str) -> float:
        return self.ratings.setdefault(name, INITIAL_RATING)

    def update(self, name_a: str, name_b: str, winner_id: int) -> Tuple[float, float]:
        delta_a, delta_b = rating_deltas(self.get(name_a), self.get(name_b), winner_id, self.k_factor)
        self.ratings[name_a] += delta_a
        self.ratings[name_b] += delta_b
        return self.ratings[name_a], self.ratings[name_b]
