"""ConcordAuto - Réconciliation Marque/Modèle/Version contre le référentiel véhicules."""

from concordauto.config import ConcordAutoError, ConfigError, ConfigFileError, MatchConfig
from concordauto.io_excel import ExcelFileError

__all__ = [
    "__version__",
    "ConcordAutoError",
    "ConfigError",
    "ConfigFileError",
    "ExcelFileError",
    "MatchConfig",
]

__version__ = "0.1.0"
