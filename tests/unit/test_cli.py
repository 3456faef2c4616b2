from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from parlor.cli import cli


def _settings(**overrides):
    mock_settings = MagicMock()
    mock_settings.log_level = "INFO"
    mock_settings.log_format = "console"
    mock_settings.is_production = False
    for key, value in overrides.items():
        setattr(mock_settings, key, value)
    return mock_settings


def test_init_db_refuses_production_without_force():
    """init-db must not run against a production database by accident."""
    runner = CliRunner()

    with patch("parlor.cli.get_settings", return_value=_settings(is_production=True)), \
         patch("parlor.cli.configure_logging"):
        result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Running in production mode" in result.output


def test_verify_allowed_exits_zero():
    runner = CliRunner()

    with patch("parlor.cli.configure_logging"), \
         patch("parlor.infrastructure.persistence.database.get_db_manager") as get_db, \
         patch(
             "parlor.domain.services.PermissionEvaluator.verify",
             new_callable=AsyncMock,
             return_value=True,
         ) as verify:
        get_db.return_value.disconnect = AsyncMock()
        get_db.return_value.session.return_value.__aenter__ = AsyncMock()
        get_db.return_value.session.return_value.__aexit__ = AsyncMock(return_value=False)
        result = runner.invoke(
            cli, ["verify", "u1", "READ_CHANNEL", "--resource-id", "chan-1", "--kind", "CHANNEL"]
        )

    assert result.exit_code == 0
    assert "allowed" in result.output
    verify.assert_awaited_once()
    assert verify.await_args.args == ("u1", "chan-1", "CHANNEL", ["READ_CHANNEL"])


def test_verify_denied_exits_one():
    runner = CliRunner()

    with patch("parlor.cli.configure_logging"), \
         patch("parlor.infrastructure.persistence.database.get_db_manager") as get_db, \
         patch(
             "parlor.domain.services.PermissionEvaluator.verify",
             new_callable=AsyncMock,
             return_value=False,
         ):
        get_db.return_value.disconnect = AsyncMock()
        get_db.return_value.session.return_value.__aenter__ = AsyncMock()
        get_db.return_value.session.return_value.__aexit__ = AsyncMock(return_value=False)
        result = runner.invoke(cli, ["verify", "u1", "BAN_USER"])

    assert result.exit_code == 1
    assert "denied" in result.output


def test_info_shows_configuration():
    runner = CliRunner()

    with patch("parlor.cli.configure_logging"):
        result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Bootstrap instance roles" in result.output
