"""
Tracker configuration.

Edit these defaults to change the cadence rules, the monthly
mail target and where the schedule is loaded from.
"""

from dataclasses import asdict, dataclass


@dataclass
class TrackerConfig:
    """
    Settings shared by the report script, the demo and the Streamlit host.

    Key concepts:
    - Follow-up offset: text and voicemail go out this many days after a mail drop
    - Monthly target: mail volume range a month should land in
    - Fixed source: when ``sheet_url`` is set the host always loads that sheet
    """

    # === Cadence ===
    follow_up_days: int = 13
    cadence_width: int = 5         # Batches shown per campaign in the cadence matrix

    # === Monthly target (mail pieces) ===
    target_min: int = 9000
    target_max: int = 10000
    chart_months: int = 12

    # === Source ===
    sheet_url: str = ""
    sheet_gid: str = ""            # Force a tab, e.g. "808371977"
    sheet_tab_name: str = "Marketing"  # Display only
    fetch_timeout: float = 20.0

    # === Host state ===
    state_path: str = ".tracker_state.json"

    # === Logging ===
    log_level: str = "INFO"

    @property
    def use_fixed_source(self) -> bool:
        return bool(self.sheet_url)

    def to_dict(self) -> dict:
        """Settings as plain values, for reports and logs."""
        return asdict(self)


# === Presets ===

def default_config() -> TrackerConfig:
    """Settings used when nothing is overridden."""
    return TrackerConfig()

