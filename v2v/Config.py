"""
Simulation and detection parameters.

Every knob is named and carries a default; nodes receive their own copy so a
scenario can mix malicious and defending nodes from one base configuration.
"""

from dataclasses import dataclass, replace

ATTACK_TYPES = (
    'none',
    'flood',
    'spoof',
    'replay',
    'sybil',
    'timing',
    'hello_flood',
    'selective_forwarding',
    'data_manipulation',
)


@dataclass
class Config:
    """Per-node configuration for the application and its detector."""

    # ============================================================================
    # Node role
    # ============================================================================
    malicious: bool = False
    attack_type: str = 'none'
    attack_interval: float = 1.0

    # ============================================================================
    # Detection switches
    # ============================================================================
    detection_enabled: bool = True
    entropy_based_detection_enabled: bool = True
    message_validation_enabled: bool = True

    # ============================================================================
    # Detection thresholds (messages per detection window)
    # ============================================================================
    flood_threshold: float = 50.0
    severe_flood_threshold: float = 100.0
    burst_threshold: float = 200.0
    anomaly_threshold: float = 2.0

    # ============================================================================
    # Timing (seconds)
    # ============================================================================
    detection_window: float = 3.0
    blacklist_timeout: float = 30.0
    persistent_flood_duration: float = 6.0
    max_burst_duration: float = 1.0
    max_message_age: float = 5.0

    # ============================================================================
    # Behavioural limits
    # ============================================================================
    min_burst_size: int = 50
    max_suspicion_level: int = 3
    max_reasonable_speed: float = 50.0  # 50 m/s = 180 km/h

    # ============================================================================
    # Local protective response
    # ============================================================================
    evasive_action_enabled: bool = True
    evasive_action_duration: float = 5.0
    evasive_speed_limit: float = 5.0

    # ============================================================================
    # Beaconing
    # ============================================================================
    beacon_interval: float = 1.0
    position_update_interval: float = 1.0

    # ============================================================================
    # Population, only used for the delivery ratio
    # ============================================================================
    total_defenders: int = 16
    total_attackers: int = 8

    def replace(self, **overrides):
        return replace(self, **overrides)

    def is_known_attack(self):
        return self.attack_type in ATTACK_TYPES
