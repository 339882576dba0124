"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for game rules and room settings."""

    max_players: int = Field(
        default=2,
        ge=2,
        le=2,
        description="Players per room; the game is strictly two-player"
    )
    personal_stack_size: int = Field(
        default=8,
        ge=1,
        le=27,
        description="Cards dealt to each player's personal stack"
    )
    play_area_count: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Number of shared play areas"
    )
    max_specials: int = Field(
        default=2,
        ge=0,
        description="Special card limit per play area (informational)"
    )
    combo_size: int = Field(
        default=5,
        ge=1,
        description="Cards in a play area that trigger the combo check"
    )
    combo_points: int = Field(
        default=3,
        ge=0,
        description="Score and position awarded for a Big Five combo"
    )
    win_position: int = Field(
        default=10,
        ge=1,
        description="Position at which a player wins"
    )
    room_code_length: int = Field(
        default=6,
        ge=4,
        le=12,
        description="Length of generated room codes"
    )
    room_code_attempts: int = Field(
        default=16,
        ge=1,
        le=1000,
        description="Attempts to find an unused room code before giving up"
    )

    @field_validator('personal_stack_size')
    @classmethod
    def validate_stack_size(cls, v, info):
        """Both stacks must fit in the 54-card deck."""
        max_players = info.data.get('max_players', 2)
        if v * max_players > 54:
            raise ValueError(f'personal_stack_size ({v}) too large for {max_players} players')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count fills the room."""
        return player_count == self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
