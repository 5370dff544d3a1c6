"""tally apportion コマンドのテスト."""

from click.testing import CliRunner

from src.interfaces.cli.commands.tally.apportion import apportion


class TestApportionCommand:
    def test_largest_remainder(self) -> None:
        runner = CliRunner()
        result = runner.invoke(apportion, ["--seats", "5", "P1=600", "P2=400"])

        assert result.exit_code == 0
        assert "largest_remainder" in result.output
        assert "3議席" in result.output
        assert "2議席" in result.output

    def test_highest_averages(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            apportion,
            ["--seats", "4", "--method", "highest_averages", "A=100", "B=80", "C=30"],
        )

        assert result.exit_code == 0
        lines = [line.strip() for line in result.output.splitlines()]
        assert any(line.startswith("C") and "議席なし" in line for line in lines)

    def test_degenerate_is_reported_as_error(self) -> None:
        """選挙商数0はエラーメッセージとして表示される."""
        runner = CliRunner()
        result = runner.invoke(apportion, ["--seats", "10", "A=2", "B=1"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_party_votes_format(self) -> None:
        runner = CliRunner()
        result = runner.invoke(apportion, ["--seats", "3", "PL600"])

        assert result.exit_code == 2
        assert "PARTY=VOTES" in result.output

    def test_negative_votes_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(apportion, ["--seats", "3", "PL=-1"])

        assert result.exit_code == 2

    def test_unknown_method_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(apportion, ["--seats", "3", "--method", "sainte_lague", "A=1"])

        assert result.exit_code == 2
