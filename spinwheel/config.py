# Mode configuration for different ways of running the wheel

from .constants import (
    REGULAR_SPIN_ROTATIONS, REGULAR_SPIN_DURATION,
    FINAL_SPIN_ROTATIONS, FINAL_SPIN_DURATION,
    RESPIN_COOLDOWN, MAX_AUTO_RESPINS
)


class ModeConfig:
    """Configuration for different game modes."""

    MODES = ('default', 'quick')

    def __init__(self, mode='default', **overrides):
        if mode not in self.MODES:
            raise ValueError(f"Unknown mode: {mode!r} (expected one of {', '.join(self.MODES)})")
        self.mode = mode
        self._setup_mode()
        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"ModeConfig has no setting {key!r}")
            setattr(self, key, value)

    def _setup_mode(self):
        if self.mode == 'quick':
            self._setup_quick_mode()
        else:
            self._setup_default_mode()

    def _setup_default_mode(self):
        """Default mode - full-length spins for a live audience."""
        # Winner designation
        self.auto_winner_name = None  # Designated automatically when it shows up

        # Spin timing
        self.regular_rotations = REGULAR_SPIN_ROTATIONS
        self.regular_duration = REGULAR_SPIN_DURATION
        self.final_rotations = FINAL_SPIN_ROTATIONS
        self.final_duration = FINAL_SPIN_DURATION

        # Safety net
        self.respin_cooldown = RESPIN_COOLDOWN
        self.max_auto_respins = MAX_AUTO_RESPINS

        # Display
        self.max_section_label_chars = 14
        self.mode_label = None

    def _setup_quick_mode(self):
        """Quick mode - short spins for rehearsals and demos."""
        self.auto_winner_name = None

        # Fewer turns and sub-second spins; final stays the longest
        self.regular_rotations = (2, 4)
        self.regular_duration = (0.4, 0.6)
        self.final_rotations = (3, 5)
        self.final_duration = (0.8, 1.0)

        self.respin_cooldown = 0.1
        self.max_auto_respins = MAX_AUTO_RESPINS

        self.max_section_label_chars = 10
        self.mode_label = "Quick Mode"


# Global config instance (set by main.py)
current_config = None

def get_config():
    """Get current mode configuration."""
    global current_config
    if current_config is None:
        current_config = ModeConfig('default')
    return current_config

def set_mode(mode, **overrides):
    """Set the game mode."""
    global current_config
    current_config = ModeConfig(mode, **overrides)
    return current_config
