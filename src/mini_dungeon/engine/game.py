from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from ..core.player import Player
from ..core.position import Position
from ..core.rng import RNG
from ..core.scores import Leaderboard, ScoreEntry
from ..core.things import ThingType
from ..dungeon.generator import MazeGenerator
from ..dungeon.map import DungeonMap
from ..errors import SaveError, SaveNotFoundError
from ..persistence.codec import build_record, restore
from ..persistence.manager import PathLike, SaveManager
from ..settings import GameSettings, clamp_difficulty
from .interactions import BOMB_SCORE, RANGED_DAMAGE, interaction_for
from .messages import MessageLog
from .status import Direction, GameStatus

logger = logging.getLogger(__name__)

FINAL_LEVEL = 2
LOSS_SCORE = -1
BOMB_TARGETS = (ThingType.WALL, ThingType.TRAP)


class GameEngine:
    """Headless turn-resolution engine for one player.

    Owns the current map, the player, the message log and the leaderboard.
    Front ends call ``start_game``, ``move_player``, ``activate_bomb``,
    ``save_game`` and ``load_game`` and read state back through the
    accessors. Rejected input only produces a message; it never raises and
    never changes state.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        *,
        rng: Optional[RNG] = None,
        saves: Optional[SaveManager] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or GameSettings()
        self.rng = rng or RNG()
        self.saves = saves or SaveManager()
        self._clock = clock
        rules = self.settings.rules
        self.log = MessageLog(rules.message_log_size)
        self.leaderboard = Leaderboard(rules.leaderboard_size)
        self.generator = MazeGenerator(
            self.settings.map.rows, self.settings.map.cols, self.settings.spawns, self.rng
        )
        self.status: Optional[GameStatus] = None
        self.level = 1
        self.difficulty = rules.default_difficulty
        self.steps_taken = 0
        self.step_budget = rules.step_budget
        self.map: Optional[DungeonMap] = None
        self.player = self._new_player(Position(0, 0))
        self.level1_ladder: Optional[Position] = None

    # ---- Lifecycle -------------------------------------------------------
    def start_game(self, difficulty: Optional[int] = None) -> None:
        """Begin a fresh game on level 1. The leaderboard carries over."""
        rules = self.settings.rules
        self.difficulty = clamp_difficulty(rules.default_difficulty if difficulty is None else difficulty)
        self.level = 1
        self.steps_taken = 0
        self.step_budget = rules.step_budget
        self.status = GameStatus.PLAYING
        self.log.clear()
        self._say("Welcome to MiniDungeon!")
        self._say(f"Starting Level 1 with difficulty {self.difficulty}...")
        self.map = self.generator.generate(self.difficulty, first_level=True)
        self.player = self._new_player(self.map.spawn)
        self.level1_ladder = None
        logger.info("New game: difficulty=%d budget=%d", self.difficulty, self.step_budget)
        self._say(self._progress_line())

    def _new_player(self, position: Position) -> Player:
        rules = self.settings.rules
        return Player(hp=rules.initial_hp, position=position, max_hp=rules.max_hp)

    # ---- Turn actions ----------------------------------------------------
    def move_player(self, raw_direction: str) -> bool:
        """Attempt a one-step move; return True if the player actually moved."""
        if self.status is not GameStatus.PLAYING:
            self._say("Game is not playing. Start a new game.")
            return False
        direction = Direction.parse(raw_direction)
        if direction is None:
            self._say(f"Invalid move: {raw_direction}. Use 'u', 'd', 'l', or 'r'.")
            return False

        token = direction.token
        here = self.player.position
        row, col = here.row + direction.d_row, here.col + direction.d_col
        if not self.map.in_bounds(row, col):
            self._say(f"You tried to move {token} one step but it is out of bounds.")
            return False
        target = Position(row, col)
        if not self.map.is_traversable(target):
            self._say(f"You tried to move {token} one step but it is a wall.")
            return False

        self._ranged_attacks()
        self.player.move_to(target)
        self.steps_taken += 1
        self._say(f"You moved {token} one step. Steps taken: {self.steps_taken}")
        self._interact(target)
        self._check_end_conditions()
        logger.debug("Turn %d: %s", self.steps_taken, self.player_status())
        return True

    def activate_bomb(self) -> bool:
        """Detonate a bomb on the player's cell. Consumes no step."""
        if self.status is not GameStatus.PLAYING:
            self._say("Cannot activate bomb: Game is not playing.")
            return False
        if not self.player.use_bomb():
            self._say("You have no bombs to activate!")
            return False
        self._say("You activated a bomb at your current location!")
        self.player.add_score(BOMB_SCORE)
        self._say(f"Gained {BOMB_SCORE} score. Current Score: {self.player.score}")
        for pos in self.map.neighbors_with_any_of(self.player.position, BOMB_TARGETS):
            destroyed = self.map.clear(pos)
            self._say(f"Bomb destroyed {destroyed.description} at {pos}.")
        self._check_end_conditions()
        return True

    # ---- Turn internals --------------------------------------------------
    def _ranged_attacks(self) -> None:
        rules = self.settings.rules
        here = self.player.position
        for foe in self.map.ranged_mutant_positions():
            if foe.manhattan(here) > rules.ranged_attack_range:
                continue
            if self.rng.chance(rules.ranged_hit_chance):
                self.player.take_damage(RANGED_DAMAGE)
                self._say(
                    f"A ranged mutant at {foe} attacked and you lost {RANGED_DAMAGE} HP. "
                    f"Current HP: {self.player.hp}"
                )
            else:
                self._say(f"A ranged mutant at {foe} attacked, but missed.")

    def _interact(self, pos: Position) -> None:
        kind = self.map.thing_at(pos)
        if kind is None:
            return
        effect = interaction_for(kind)
        line = effect.handler(self.player, self.difficulty)
        if line:
            self._say(line)
        if effect.consumed:
            self.map.clear(pos)
        if effect.climbs:
            self._climb(pos)

    def _climb(self, ladder: Position) -> None:
        if self.level >= FINAL_LEVEL:
            self._say("You found the ladder and escaped the dungeon!")
            self.status = GameStatus.WON
            return
        self._say(f"You found the ladder! Advancing to Level {self.level + 1}...")
        self._advance_level(ladder)

    def _advance_level(self, ladder: Position) -> None:
        self.level += 1
        self.difficulty = clamp_difficulty(self.settings.rules.default_difficulty + 2 * (self.level - 1))
        self._say(f"Entering Level {self.level} with difficulty {self.difficulty}...")
        self.level1_ladder = ladder
        # Level 2 keeps the dimensions of the level being left.
        generator = MazeGenerator(self.map.rows, self.map.cols, self.settings.spawns, self.rng)
        self.map = generator.generate(self.difficulty, first_level=False, seed_position=ladder)
        self.player.move_to(self.map.spawn)
        logger.info("Entered level %d at %s (difficulty %d)", self.level, ladder, self.difficulty)
        self._say(self._progress_line())

    def _check_end_conditions(self) -> None:
        if self.player.hp <= 0:
            self._lose("Your HP dropped to 0! Game Over.")
        elif self.steps_taken >= self.step_budget:
            self._lose("You ran out of steps! Game Over.")
        elif self.status is GameStatus.WON:
            self._say("Congratulations! You successfully escaped the dungeon!")
            self._say(f"Final Score: {self.player.score}")
            self._record_score(self.player.score)

    def _lose(self, reason: str) -> None:
        self.status = GameStatus.LOST
        self.player.force_score(LOSS_SCORE)
        self._say(reason)
        self._say(f"Final Score: {self.player.score}")
        logger.info("Game lost: %s", reason)

    def _record_score(self, score: int) -> None:
        if score <= 0:
            return
        if self.leaderboard.add(score, self._clock()):
            self._say(f"New High Score! You made it into the Top {self.leaderboard.capacity}!")

    # ---- Persistence -----------------------------------------------------
    def save_game(self, path: PathLike) -> bool:
        """Write the full game state to ``path``. Only allowed mid-game."""
        if self.status is not GameStatus.PLAYING:
            self._say("Cannot save: Game is not playing.")
            return False
        record = build_record(
            player=self.player,
            level=self.level,
            steps_taken=self.steps_taken,
            difficulty=self.difficulty,
            step_budget=self.step_budget,
            level1_ladder=self.level1_ladder,
            grid=self.map,
            leaderboard=self.leaderboard,
        )
        try:
            written = self.saves.save(record, path)
        except SaveError as e:
            logger.error("Error saving game to %s: %s", path, e)
            self._say(f"Error saving game: {e}")
            return False
        self._say(f"Game saved to {written}")
        return True

    def load_game(self, path: PathLike) -> bool:
        """Replace the current game with the one saved at ``path``.

        The record is read and fully validated before anything is assigned,
        so a failed load leaves the engine exactly as it was.
        """
        try:
            record = self.saves.load(path)
            restored = restore(record, max_hp=self.settings.rules.max_hp)
        except SaveNotFoundError as e:
            logger.error("Load failed: %s", e)
            self._say(f"Load failed: {e}")
            return False
        except (SaveError, ValueError) as e:
            logger.error("Error loading game from %s: %s", path, e)
            self._say(f"Error loading game: {e}")
            return False

        self.player = restored.player
        self.level = restored.level
        self.steps_taken = restored.steps_taken
        self.difficulty = restored.difficulty
        self.step_budget = restored.step_budget
        self.level1_ladder = restored.level1_ladder
        self.map = restored.map
        self.leaderboard.merge(restored.leaderboard)
        self.status = GameStatus.PLAYING
        self._say(f"Game loaded from {self.saves.resolve(path)}")
        return True

    # ---- Accessors -------------------------------------------------------
    @property
    def hp(self) -> int:
        return self.player.hp

    @property
    def score(self) -> int:
        return self.player.score

    @property
    def bombs(self) -> int:
        return self.player.bomb_count

    @property
    def position(self) -> Position:
        return self.player.position

    @property
    def messages(self) -> List[str]:
        return self.log.lines()

    def messages_text(self) -> str:
        return self.log.text()

    def clear_messages(self) -> None:
        self.log.clear()

    def top_scores(self) -> List[ScoreEntry]:
        return self.leaderboard.entries()

    def top_scores_display(self) -> str:
        return self.leaderboard.format()

    def player_status(self) -> str:
        p = self.player
        return (
            f"HP: {p.hp} | Score: {p.score} | Steps: {self.steps_taken}/{self.step_budget} "
            f"| Bombs: {p.bomb_count}"
        )

    def render(self) -> str:
        """Text grid with ``P`` at the player; empty before the first game."""
        if self.map is None:
            return ""
        return self.map.render(self.player.position)

    # ---- Helpers ---------------------------------------------------------
    def _progress_line(self) -> str:
        p = self.player
        return f"Player HP: {p.hp}, Score: {p.score}, Steps: {self.steps_taken}"

    def _say(self, line: str) -> None:
        self.log.add(line)
