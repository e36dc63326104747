"""
Game Settings - Validated configuration handed to the engine.

The engine only ever sees a complete GameSettings. Partial user input
(API bodies, CLI flags, query strings) is merged with the defaults here,
outside the engine.

Malformed configuration fails fast with ConfigurationError, which lists
every problem found rather than stopping at the first one.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import parse_qs

from pydantic import BaseModel, Field, ValidationError, model_validator

if TYPE_CHECKING:
    from .engine_core.dice import DicePool


D6 = (1, 2, 3, 4, 5, 6)

DEFAULT_WIDTH = 12
DEFAULT_HEIGHT = 12


class ConfigurationError(ValueError):
    """Raised when settings cannot produce a playable board."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Invalid game settings ({len(errors)} error(s)): " + "; ".join(errors)
        )


def _d6_pool(count: int) -> tuple[tuple[int, ...], ...]:
    return (D6,) * count


class GameSettings(BaseModel):
    """
    Fully populated game configuration.

    Dice pools and names are tuples; a validated instance never changes.
    """
    width: int = Field(DEFAULT_WIDTH, description="Board columns")
    height: int = Field(DEFAULT_HEIGHT, description="Board rows")
    board_dice: tuple[tuple[int, ...], ...] = Field(
        default_factory=lambda: _d6_pool(1),
        description="Pool rolled for every number tile",
    )
    move_length_dice: tuple[tuple[int, ...], ...] = Field(
        default_factory=lambda: _d6_pool(2),
        description="Pool rolled for the max new tiles of a move",
    )
    move_total_dice: tuple[tuple[int, ...], ...] = Field(
        default_factory=lambda: _d6_pool(2),
        description="Pool rolled for the target of a move",
    )
    player_names: tuple[str, ...] = Field(
        default_factory=lambda: ("player 1", "player 2"),
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_playable(self) -> GameSettings:
        errors = settings_errors(self)
        if errors:
            raise ValueError("; ".join(errors))
        return self

    @property
    def board_pool(self) -> DicePool:
        from .engine_core.dice import DicePool
        return DicePool.from_faces(self.board_dice)

    @property
    def move_length_pool(self) -> DicePool:
        from .engine_core.dice import DicePool
        return DicePool.from_faces(self.move_length_dice)

    @property
    def move_total_pool(self) -> DicePool:
        from .engine_core.dice import DicePool
        return DicePool.from_faces(self.move_total_dice)


def settings_errors(settings: GameSettings) -> list[str]:
    """Return every reason the settings are unplayable (empty if fine)."""
    errors: list[str] = []

    if settings.width < 1:
        errors.append(f"width must be positive, got {settings.width}")
    if settings.height < 1:
        errors.append(f"height must be positive, got {settings.height}")

    for name in ("board_dice", "move_length_dice", "move_total_dice"):
        pool = getattr(settings, name)
        if not pool:
            errors.append(f"{name} must contain at least one die")
            continue
        for i, die in enumerate(pool):
            if not die:
                errors.append(f"{name}[{i}] must have at least one face")

    if len(settings.player_names) != 2:
        errors.append(
            f"player_names must name exactly 2 players, got {len(settings.player_names)}"
        )

    return errors


def merge_with_defaults(
    given: GameSettings | Mapping[str, Any] | None = None,
) -> GameSettings:
    """
    Merge user overrides with the defaults.

    Missing keys and keys set to None take the default value. Anything
    else is validated as given.
    """
    if isinstance(given, GameSettings):
        return given

    overrides = {k: v for k, v in (given or {}).items() if v is not None}
    try:
        return GameSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_errors(e)) from e


def _format_validation_errors(error: ValidationError) -> list[str]:
    messages = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        msg = err["msg"]
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


# Query-string keys as the web shell names them
_QUERY_NUMBERS = {"width": "width", "height": "height"}
_QUERY_DICE = {
    "boardDice": "board_dice",
    "moveLengthDice": "move_length_dice",
    "moveTotalDice": "move_total_dice",
}


def parse_query_string(query: str) -> GameSettings:
    """
    Build settings from URL parameters.

    Example:
        ?width=8&height=10&boardDice=1,2,3&boardDice=1,2,3&player1=Ada

    Every occurrence of a dice key adds one die, faces separated by commas.
    """
    params = parse_qs(query.lstrip("?"), keep_blank_values=True)
    overrides: dict[str, Any] = {}
    errors: list[str] = []

    for key, field_name in _QUERY_NUMBERS.items():
        if key in params:
            try:
                overrides[field_name] = int(params[key][-1])
            except ValueError:
                errors.append(f"{key} must be an integer, got {params[key][-1]!r}")

    for key, field_name in _QUERY_DICE.items():
        if key in params:
            try:
                overrides[field_name] = [
                    [int(face) for face in value.split(",") if face.strip()]
                    for value in params[key]
                ]
            except ValueError:
                errors.append(f"{key} faces must be integers")

    names = list(GameSettings.model_fields["player_names"].default_factory())
    if "player1" in params:
        names[0] = params["player1"][-1]
    if "player2" in params:
        names[1] = params["player2"][-1]
    overrides["player_names"] = names

    if errors:
        raise ConfigurationError(errors)

    return merge_with_defaults(overrides)
