# DEPENDENCIES
import sys
import pytest
from pathlib import Path

# Add project root to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from utils.logger import ContraScopeLogger


@pytest.fixture(scope = "session", autouse = True)
def isolated_logs(tmp_path_factory):
    """
    Route every log file of the test session into a temporary directory
    """
    log_dir = tmp_path_factory.mktemp("logs")
    ContraScopeLogger.setup(log_dir = str(log_dir), level = "DEBUG")

    return log_dir


@pytest.fixture
def risky_contract() -> str:
    return ("Article 4. Le client peut procéder à la résiliation unilatérale du contrat.\n"
            "Article 7. La limitation de responsabilité s'applique pour toutes causes.\n"
            "Article 9. Le contrat est soumis à tacite reconduction."
           )
