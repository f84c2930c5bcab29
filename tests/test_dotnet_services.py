"""Tests for the dotnet CLI wrappers."""
import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from dotseed.core.errors import SecretStoreError
from dotseed.services.dotnet import (
    CompatibilityGate,
    PackageManager,
    TemplateScaffolder,
    UserSecretsStore,
)
from dotseed.services.dotnet.packages import project_target_framework

PROJECT = Path("/work/OrderService")


class TestUserSecretsStore:
    """Test user-secrets operations."""

    def test_mock_mode_skips_subprocess(self):
        store = UserSecretsStore(PROJECT, mock=True)
        with patch('subprocess.run') as mock_run:
            assert store.init() is True
            assert store.list() == []
            assert store.set("A", "1") is True
        mock_run.assert_not_called()

    @patch('subprocess.run')
    def test_set_command(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        assert UserSecretsStore(PROJECT).set("Db:Password", "p@ss") is True

        assert mock_run.call_args[0][0] == [
            'dotnet', 'user-secrets', 'set', 'Db:Password', 'p@ss', '--project', str(PROJECT)
        ]
        assert mock_run.call_args[1]['cwd'] == PROJECT

    @patch('subprocess.run')
    def test_set_failure_returns_false(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, 'dotnet', stderr="boom")
        assert UserSecretsStore(PROJECT).set("A", "1") is False

    @patch('subprocess.run')
    def test_set_missing_dotnet_returns_false(self, mock_run):
        mock_run.side_effect = FileNotFoundError("dotnet")
        assert UserSecretsStore(PROJECT).set("A", "1") is False

    @patch('subprocess.run')
    def test_list_returns_lines(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="A:B = x\n\nC = y\n", stderr="")
        assert UserSecretsStore(PROJECT).list() == ["A:B = x", "C = y"]

    @patch('subprocess.run')
    def test_list_empty_banner(self, mock_run):
        mock_run.return_value = Mock(
            returncode=0, stdout="No secrets configured for this application.\n", stderr=""
        )
        assert UserSecretsStore(PROJECT).list() == []

    @patch('subprocess.run')
    def test_list_failure_raises(self, mock_run):
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="Could not find UserSecretsId")
        with pytest.raises(SecretStoreError):
            UserSecretsStore(PROJECT).list()

    @patch('subprocess.run')
    def test_init_command(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="Set UserSecretsId", stderr="")

        assert UserSecretsStore(PROJECT).init() is True
        assert mock_run.call_args[0][0] == [
            'dotnet', 'user-secrets', 'init', '--project', str(PROJECT)
        ]


class TestTemplateScaffolder:
    """Test dotnet new invocation."""

    @patch('subprocess.run')
    def test_create_command(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        ok = TemplateScaffolder().create_from_template("webapi", "Api", Path("/work/Api"))

        assert ok is True
        assert mock_run.call_args[0][0] == ['dotnet', 'new', 'webapi', '-n', 'Api', '-o', '/work/Api']

    @patch('subprocess.run')
    def test_failure_returns_false(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, 'dotnet', stderr="No templates found")
        assert TemplateScaffolder().create_from_template("nope", "Api", Path("/work/Api")) is False

    def test_mock_mode_creates_directory(self, tmp_path):
        target = tmp_path / "Api"
        assert TemplateScaffolder(mock=True).create_from_template("webapi", "Api", target) is True
        assert target.is_dir()


class TestPackageManager:
    """Test package installation and probing."""

    @patch('subprocess.run')
    def test_add_package_command(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        assert PackageManager(PROJECT).add_package("Dapper") is True
        assert mock_run.call_args[0][0] == ['dotnet', 'add', str(PROJECT), 'package', 'Dapper']

    @patch('subprocess.run')
    def test_add_package_failure(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, 'dotnet', stderr="NU1101")
        assert PackageManager(PROJECT).add_package("Nope") is False

    @patch('subprocess.run')
    def test_try_restore_uses_probe_project(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        assert PackageManager(PROJECT).try_restore("Dapper") is True

        assert mock_run.call_count == 2
        create_cmd = mock_run.call_args_list[0][0][0]
        add_cmd = mock_run.call_args_list[1][0][0]
        assert create_cmd[:3] == ['dotnet', 'new', 'classlib']
        assert add_cmd[:2] == ['dotnet', 'add']
        assert add_cmd[-2:] == ['package', 'Dapper']
        assert str(PROJECT) not in add_cmd

    @patch('subprocess.run')
    def test_try_restore_matches_project_framework(self, mock_run, tmp_path):
        (tmp_path / "Api.csproj").write_text(
            "<Project><PropertyGroup><TargetFramework>net8.0</TargetFramework>"
            "</PropertyGroup></Project>"
        )
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        assert PackageManager(tmp_path).try_restore("Dapper") is True

        create_cmd = mock_run.call_args_list[0][0][0]
        assert create_cmd[-2:] == ['-f', 'net8.0']

    @patch('subprocess.run')
    def test_try_restore_without_project_file_uses_template_default(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        PackageManager(tmp_path).try_restore("Dapper")

        assert '-f' not in mock_run.call_args_list[0][0][0]

    @patch('subprocess.run')
    def test_try_restore_reports_failure(self, mock_run):
        mock_run.side_effect = [
            Mock(returncode=0, stdout="", stderr=""),
            Mock(returncode=1, stdout="error NU1202", stderr=""),
        ]
        assert PackageManager(PROJECT).try_restore("Legacy.Only") is False


class TestCompatibilityGate:
    """Test the compatibility gate."""

    def test_compatible(self):
        manager = Mock()
        manager.try_restore.return_value = True
        assert CompatibilityGate(manager).is_compatible("Dapper") is True
        manager.try_restore.assert_called_once_with("Dapper")

    def test_incompatible(self):
        manager = Mock()
        manager.try_restore.return_value = False
        assert CompatibilityGate(manager).is_compatible("Legacy") is False

    def test_exception_means_incompatible(self):
        manager = Mock()
        manager.try_restore.side_effect = FileNotFoundError("dotnet")
        assert CompatibilityGate(manager).is_compatible("Dapper") is False


class TestProjectTargetFramework:
    """Test reading the target framework from a project file."""

    def test_single_framework(self, tmp_path):
        (tmp_path / "Api.csproj").write_text("<TargetFramework>net9.0</TargetFramework>")
        assert project_target_framework(tmp_path) == "net9.0"

    def test_first_of_multiple_frameworks(self, tmp_path):
        (tmp_path / "Lib.csproj").write_text("<TargetFrameworks>net8.0;netstandard2.0</TargetFrameworks>")
        assert project_target_framework(tmp_path) == "net8.0"

    def test_no_project_file(self, tmp_path):
        assert project_target_framework(tmp_path) is None
