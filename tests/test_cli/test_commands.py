"""Tests for CLI commands."""

import pytest
from typer.testing import CliRunner

from wpspawn.cli.main import app
from wpspawn.loader import SiteLoader


SITE_YAML = """
metadata:
  name: blog
  namespace: sites
spec:
  image: wordpress:6
  routes:
    - domain: example.com
  code:
    git:
      repository: https://example.com/repo.git
  bootstrap:
    envFrom:
      - secretRef:
          name: bootstrap
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def site_file(tmp_path):
    path = tmp_path / "site.yaml"
    path.write_text(SITE_YAML)
    return path


class TestCompileCommand:
    """Test the compile command."""

    def test_compile_web(self, runner, site_file):
        """Test compiling the web shape to stdout."""
        result = runner.invoke(app, ["compile", str(site_file)])

        assert result.exit_code == 0
        assert "name: wordpress" in result.stdout
        assert "wp-install" in result.stdout

    def test_compile_job_with_command(self, runner, site_file):
        """Test compiling the job shape with a command."""
        result = runner.invoke(app, ["compile", str(site_file), "--shape", "job", "--", "wp", "plugin", "list"])

        assert result.exit_code == 0
        assert "restartPolicy: Never" in result.stdout
        assert "name: wp-cli" in result.stdout
        assert "- plugin" in result.stdout

    def test_compile_to_file(self, runner, site_file, tmp_path):
        """Test writing the manifest to a file."""
        output = tmp_path / "pod.yaml"
        result = runner.invoke(app, ["compile", str(site_file), "-o", str(output)])

        assert result.exit_code == 0
        assert "initContainers:" in output.read_text()

    def test_compile_missing_file(self, runner, tmp_path):
        """Test that a missing site file exits with status 1."""
        result = runner.invoke(app, ["compile", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1

    def test_compile_directory(self, runner, tmp_path):
        """Test that an unreadable site path exits with status 1."""
        result = runner.invoke(app, ["compile", str(tmp_path)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, IsADirectoryError)

    def test_compile_unknown_shape(self, runner, site_file):
        """Test that an unknown shape exits with status 1."""
        result = runner.invoke(app, ["compile", str(site_file), "--shape", "cron"])

        assert result.exit_code == 1


class TestOtherCommands:
    """Test steps and validate."""

    def test_steps(self, runner, site_file):
        """Test listing init steps."""
        result = runner.invoke(app, ["steps", str(site_file)])

        assert result.exit_code == 0
        assert "prepare-volumes" in result.stdout
        assert "install-wp" in result.stdout

    def test_validate(self, runner, site_file):
        """Test validating a site file."""
        result = runner.invoke(app, ["validate", str(site_file)])

        assert result.exit_code == 0
        assert "sites/blog is valid" in result.stdout
        assert "Code source: git" in result.stdout
        assert "Media source: none" in result.stdout

    def test_loader_reused_for_config(self, site_file):
        """Test that the loader reads the site independently of config."""
        site = SiteLoader().load_site(site_file)

        assert site.spec.bootstrap.env_from[0].secret_ref.name == "bootstrap"
