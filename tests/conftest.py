"""
Pytest configuration and shared fixtures
"""

import sys
import textwrap
from pathlib import Path

import pytest

# Make the package importable without installing it
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "tools"))


def write_post(root: Path, rel: str, front: str, body: str = "Body text.\n") -> Path:
    """Write a Markdown post with a front-matter block under root."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    text = "---\n" + textwrap.dedent(front).strip() + "\n---\n\n" + body
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    """A small blog corpus: three published posts and one draft."""
    root = tmp_path / "content"
    write_post(
        root,
        "activator-utilities/index.md",
        """
        title: ActivatorUtilities
        date: 2021-04-22
        tags: [dotnet, dependency-injection]
        """,
        "# ActivatorUtilities\n\nCreating instances outside the container.\n",
    )
    write_post(
        root,
        "triggers/index.md",
        """
        title: EF Core Triggers
        date: 2021-04-23
        tags: [dotnet, efcore]
        series: EF Core
        """,
    )
    write_post(
        root,
        "projectables.md",
        """
        title: Projectables
        date: 2021-05-03
        tags: [dotnet, efcore, source-generators]
        series: EF Core
        """,
    )
    write_post(
        root,
        "scenario-tests/index.md",
        """
        title: ScenarioTests
        date: 2021-06-01
        tags: [testing]
        draft: true
        """,
    )
    return root
