"""Configuration classes for mstviz components."""

from dataclasses import dataclass


@dataclass
class PlaybackConfig:
    """Cadence settings for automatic stepping."""

    # Delay between steps at speed 1.0, in seconds
    base_delay: float = 0.6

    # Floor for the delay regardless of speed
    min_delay: float = 0.1

    # Accepted speed multiplier range
    speed_min: float = 0.1
    speed_max: float = 2.0

    default_speed: float = 1.0

    def delay_for(self, speed: float) -> float:
        """Return the inter-step delay in seconds for a speed multiplier."""
        if speed <= 0:
            raise ValueError(f"Speed multiplier must be positive, got {speed}")
        return max(self.min_delay, self.base_delay / speed)

    def validate_speed(self, speed: float) -> float:
        """Return ``speed`` as float or raise if it is outside the range."""
        value = float(speed)
        if not self.speed_min <= value <= self.speed_max:
            raise ValueError(
                f"Speed multiplier {value} outside [{self.speed_min}, {self.speed_max}]"
            )
        return value


@dataclass
class GraphBounds:
    """Bounds the upstream UI applies to graph generation parameters."""

    min_nodes: int = 3
    max_nodes: int = 30

    min_edge_prob: float = 0.0
    max_edge_prob: float = 1.0

    def clamp_node_count(self, n: int) -> int:
        """Clamp a requested node count into ``[min_nodes, max_nodes]``."""
        return max(self.min_nodes, min(int(n), self.max_nodes))

    def clamp_edge_prob(self, p: float) -> float:
        """Clamp an edge probability into ``[min_edge_prob, max_edge_prob]``."""
        return max(self.min_edge_prob, min(float(p), self.max_edge_prob))


# Global configuration instances
PLAYBACK_CONFIG = PlaybackConfig()
GRAPH_BOUNDS = GraphBounds()
