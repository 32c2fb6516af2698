"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors that other modules can import.

The STFT core defines its own `config.py` for transform defaults.
"""

from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent
# From src/tfmatrix/global_config.py, go up two levels: src/tfmatrix -> src -> repo root
PROJECT_ROOT: Path = PACKAGE_ROOT.parent.parent


# Data directories
DATA_DIR: Path = PROJECT_ROOT / "data"
RAW_AUDIO_DIR: Path = DATA_DIR / "datasets" / "raw" / "audio"
DERIVED_DIR: Path = DATA_DIR / "derived"

# Logs directories
LOGS_DIR: Path = DATA_DIR / "logs"
DERIVED_LOGS_DIR: Path = LOGS_DIR / "derived"
