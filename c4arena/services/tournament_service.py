import logging
import random
from typing import Dict, List, Optional, Sequence

from c4arena.engine.bot import BotEngine
from c4arena.engine.elo import EloTable
from c4arena.models.enums import BotPersonality, GameStatus
from c4arena.schemas.game_schema import GameSummary
from c4arena.schemas.tournament_schema import ScheduledGame, Standing, TournamentReport
from c4arena.services.game_runner import GameRunner

# Logger setup
logger = logging.getLogger(__name__)


class TournamentService:
    """Round-robin bot tournaments: every ordered pairing, both seats, `rounds` times."""

    def __init__(self, seed: Optional[int] = None, runner: Optional[GameRunner] = None):
        self.rng = random.Random(seed)
        # The Easy bot draws from its own stream so schedules stay reproducible
        self.runner = runner if runner is not None else GameRunner(BotEngine(rng=random.Random(seed)))

    def create_schedule(self, personalities: Sequence[BotPersonality], rounds: int) -> List[ScheduledGame]:
        """
        Generates the round-robin schedule.
        Pairs are shuffled within a round so one bot does not play many games in a row.
        """
        if rounds < 1:
            raise ValueError(f"A tournament needs at least one round, got {rounds}")
        bots = [BotPersonality(p) for p in personalities]
        if len(bots) < 2:
            raise ValueError("A tournament needs at least two personalities")

        schedule = []
        for r in range(1, rounds + 1):
            round_pairs = []
            for i in range(len(bots)):
                for j in range(len(bots)):
                    if i == j:
                        continue  # Can't play self
                    round_pairs.append(ScheduledGame(round_number=r, player_1=bots[i], player_2=bots[j]))

            self.rng.shuffle(round_pairs)
            schedule.extend(round_pairs)
        return schedule

    def run(self, personalities: Sequence[BotPersonality], rounds: int = 1) -> TournamentReport:
        schedule = self.create_schedule(personalities, rounds)
        logger.info("Tournament started: %s games over %s round(s)", len(schedule), rounds)

        games = []
        for index, game in enumerate(schedule, start=1):
            games.append(self.runner.play(game.player_1, game.player_2, round_number=game.round_number))
            if index % 100 == 0:
                logger.info("Tournament progress: %s/%s games", index, len(schedule))

        report = self.aggregate(games, rounds)
        logger.info("Tournament complete: %s games, %s draws", report.total_games, report.draws)
        return report

    @staticmethod
    def aggregate(games: Sequence[GameSummary], rounds: int) -> TournamentReport:
        standings: Dict[BotPersonality, Standing] = {}
        head_to_head: Dict[str, Dict[str, int]] = {}
        elo = EloTable()
        draws = first_wins = second_wins = 0

        for game in games:
            p1, p2 = game.player_1, game.player_2
            for bot in (p1, p2):
                standings.setdefault(bot, Standing(personality=bot))
                head_to_head.setdefault(bot.value, {})
            a, b = standings[p1], standings[p2]

            if game.status == GameStatus.IN_PROGRESS:
                logger.warning("Skipping unfinished game %s vs %s", p1, p2)
                continue

            if game.winner == 1:
                a.wins += 1
                b.losses += 1
                first_wins += 1
                head_to_head[p1.value][p2.value] = head_to_head[p1.value].get(p2.value, 0) + 1
            elif game.winner == 2:
                a.losses += 1
                b.wins += 1
                second_wins += 1
                head_to_head[p2.value][p1.value] = head_to_head[p2.value].get(p1.value, 0) + 1
            else:
                a.draws += 1
                b.draws += 1
                draws += 1

            a.matches_played += 1
            b.matches_played += 1
            for seat, standing in ((1, a), (2, b)):
                moves = [m for m in game.history if m.player == seat]
                standing.total_moves += len(moves)
                standing.total_duration_seconds += sum(m.duration or 0.0 for m in moves)

            elo.update(p1.value, p2.value, game.winner or 0)

        for bot, standing in standings.items():
            standing.rating = elo.get(bot.value)

        return TournamentReport(
            rounds=rounds,
            total_games=sum(1 for g in games if g.status != GameStatus.IN_PROGRESS),
            standings=sorted(standings.values(), key=lambda s: (-s.rating, s.personality.value)),
            head_to_head=head_to_head,
            draws=draws,
            first_player_wins=first_wins,
            second_player_wins=second_wins,
        )
