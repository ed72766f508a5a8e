from scout.models.base import BaseOracle, OracleError, OracleTimeout
from scout.models.mock import ScriptedOracle
from scout.models.openai_compat import OpenAICompatOracle

__all__ = ["BaseOracle", "OpenAICompatOracle", "OracleError", "OracleTimeout", "ScriptedOracle"]
