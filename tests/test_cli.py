"""Tests for CLI commands."""

from unittest.mock import AsyncMock, patch

import pytest
import typer
from typer.testing import CliRunner

from zoneshift.cli.commands.migrate import parse_edit
from zoneshift.cli.main import app
from zoneshift.core.exceptions import ProviderError
from zoneshift.core.models import AccountInfo, Zone

runner = CliRunner()


@pytest.fixture
def accounts_file(tmp_path):
    path = tmp_path / "accounts.yml"
    path.write_text(
        "accounts:\n"
        "  personal:\n"
        "    token: tok-personal\n"
        "  work:\n"
        "    token: tok-work\n"
    )
    return path


def invoke(accounts_file, *args, **kwargs):
    return runner.invoke(app, ["--accounts-file", str(accounts_file), *args], **kwargs)


class TestAccountCommands:
    """Tests for account commands."""

    def test_list(self, accounts_file):
        result = invoke(accounts_file, "accounts", "list")

        assert result.exit_code == 0
        assert "personal" in result.output
        assert "work" in result.output

    def test_list_without_file(self, tmp_path):
        result = invoke(tmp_path / "missing.yml", "accounts", "list")

        assert result.exit_code == 0
        assert "No accounts configured" in result.output

    def test_list_verify(self, accounts_file, provider):
        provider.get_account.return_value = AccountInfo(email="ops@example.com", status="active")

        with patch(
            "zoneshift.cli.commands.accounts.get_client", AsyncMock(return_value=provider)
        ):
            result = invoke(accounts_file, "accounts", "list", "--verify")

        assert result.exit_code == 0
        assert "ops@example.com" in result.output
        assert provider.get_account.await_count == 2
        provider.disconnect.assert_awaited_once()

    def test_verify_unknown_account(self, accounts_file):
        result = invoke(accounts_file, "accounts", "verify", "nobody")

        assert result.exit_code == 1
        assert "Unknown account: nobody" in result.output

    def test_invalid_accounts_file(self, tmp_path):
        path = tmp_path / "accounts.yml"
        path.write_text("accounts: [not, a, mapping]\n")

        result = invoke(path, "accounts", "list")

        assert result.exit_code == 1
        assert "Invalid accounts file" in result.output


class TestZoneCommands:
    """Tests for zone and droplet listing."""

    def test_zones_list(self, accounts_file, provider):
        provider.list_zones.return_value = [Zone(name="foo.com", ttl=1800)]

        with patch("zoneshift.cli.commands.zones.get_client", AsyncMock(return_value=provider)):
            result = invoke(accounts_file, "zones", "list", "--account", "personal")

        assert result.exit_code == 0
        assert "foo.com" in result.output
        provider.list_zones.assert_awaited_once_with("tok-personal")

    def test_zones_list_provider_error(self, accounts_file, provider):
        provider.list_zones.side_effect = ProviderError("Unable to authenticate you", 401)

        with patch("zoneshift.cli.commands.zones.get_client", AsyncMock(return_value=provider)):
            result = invoke(accounts_file, "zones", "list", "-a", "personal")

        assert result.exit_code == 1
        assert "Unable to authenticate you" in result.output
        provider.disconnect.assert_awaited_once()

    def test_records(self, accounts_file, provider):
        with patch("zoneshift.cli.commands.zones.get_client", AsyncMock(return_value=provider)):
            result = invoke(accounts_file, "zones", "records", "foo.com", "-a", "personal")

        assert result.exit_code == 0
        assert "1.1.1.1" in result.output
        assert "ns1" in result.output

    def test_instances(self, accounts_file, provider):
        with patch("zoneshift.cli.commands.zones.get_client", AsyncMock(return_value=provider)):
            result = invoke(accounts_file, "instances", "list", "-a", "work")

        assert result.exit_code == 0
        assert "dst" in result.output
        assert "2.2.2.2" in result.output


class TestMigrateCommands:
    """Tests for migrate plan and run."""

    @pytest.fixture(autouse=True)
    def patched_client(self, provider):
        with patch(
            "zoneshift.cli.commands.migrate.get_client", AsyncMock(return_value=provider)
        ):
            yield

    def test_plan_copy(self, accounts_file, provider):
        result = invoke(
            accounts_file, "migrate", "plan", "foo.com", "-a", "personal", "-t", "work", "-n", "bar.com"
        )

        assert result.exit_code == 0
        assert "COPY" in result.output
        assert "2.2.2.2" in result.output
        provider.create_zone.assert_not_awaited()

    def test_plan_with_edit(self, accounts_file):
        result = invoke(
            accounts_file, "migrate", "plan", "foo.com", "-a", "personal", "--set", "1=9.9.9.9"
        )

        assert result.exit_code == 0
        assert "CHANGE" in result.output
        assert "9.9.9.9" in result.output

    def test_run_copy(self, accounts_file, provider):
        result = invoke(
            accounts_file, "migrate", "run", "foo.com", "-a", "personal", "-t", "work", "-n", "bar.com"
        )

        assert result.exit_code == 0
        assert "Copy complete: bar.com in account work" in result.output
        provider.create_zone.assert_awaited_once()
        provider.delete_zone.assert_not_awaited()

    def test_run_move_declined(self, accounts_file, provider):
        result = invoke(
            accounts_file, "migrate", "run", "foo.com", "-a", "personal", "-t", "work", input="n\n"
        )

        assert result.exit_code == 1
        assert "Aborted" in result.output
        provider.create_zone.assert_not_awaited()
        provider.delete_zone.assert_not_awaited()

    def test_run_move_confirmed(self, accounts_file, provider):
        result = invoke(
            accounts_file, "migrate", "run", "foo.com", "-a", "personal", "-t", "work", "--yes"
        )

        assert result.exit_code == 0
        assert "Move complete: foo.com in account work" in result.output
        provider.delete_zone.assert_awaited_once_with("tok-personal", "foo.com")

    def test_run_failure(self, accounts_file, provider):
        provider.create_zone.side_effect = ProviderError("Domain already exists", 422)

        result = invoke(
            accounts_file, "migrate", "run", "foo.com", "-a", "personal", "-n", "bar.com"
        )

        assert result.exit_code == 1
        assert "Domain already exists" in result.output

    def test_run_without_address_record(self, accounts_file, provider, make_record):
        provider.list_zone_records.return_value = [make_record(1, "TXT", "hello")]

        result = invoke(
            accounts_file, "migrate", "run", "foo.com", "-a", "personal", "-n", "bar.com"
        )

        assert result.exit_code == 1
        assert "no address record" in result.output

    def test_unknown_instance(self, accounts_file):
        result = invoke(
            accounts_file, "migrate", "plan", "foo.com", "-a", "personal", "-i", "nope"
        )

        assert result.exit_code == 1
        assert "Unknown destination instance" in result.output


class TestParseEdit:
    """Tests for --set parsing."""

    def test_valid(self):
        assert parse_edit("12=1.2.3.4") == (12, "1.2.3.4")

    def test_data_may_contain_equals(self):
        assert parse_edit("3=v=spf1 -all") == (3, "v=spf1 -all")

    @pytest.mark.parametrize("value", ["1.2.3.4", "x=1.2.3.4", "=1.2.3.4"])
    def test_invalid(self, value):
        with pytest.raises(typer.BadParameter):
            parse_edit(value)


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "zoneshift version" in result.output
