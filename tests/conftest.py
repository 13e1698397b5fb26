import os
import sys
from pathlib import Path

# Set test environment variables before app modules read them
os.environ.update(
    {
        "REGION": "ap-northeast-1",
        "TABLE_NAME": "test-channel-table",
        "DEBUG": "false",
    }
)

# Ensure the project root is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from tests.fixtures.aws_fixtures import *  # noqa: E402, F403
