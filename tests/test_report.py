"""
Tests for snapshot loading, settings and the report entry point.
"""

import json
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from config.constants import WEEKDAY_LABELS
from config.settings import Settings, load_settings, settings
from data.loader import SnapshotError, load_snapshot, parse_snapshot
from run_journal_report import main, session_date


SNAPSHOT = {
    'accounts': [{
        'id': 'acc-1', 'name': 'Challenge', 'initialCapital': 10_000,
        'currency': 'USD', 'currentCapital': 10_350,
        'profitTarget': 10, 'profitTargetType': 'Percentage',
        'drawdownType': 'Trailing', 'drawdownValue': 5,
        'drawdownValueType': 'Percentage', 'totalWithdrawn': 100,
    }],
    'trades': [
        {'id': 't1', 'accountId': 'acc-1', 'strategyId': 's1', 'date': '2024-02-01T10:00:00Z',
         'asset': 'EURUSD', 'direction': 'Buy', 'lotSize': 1, 'takeProfitPips': 20,
         'stopLossPips': 10, 'result': 600},
        {'id': 't2', 'accountId': 'acc-1', 'date': '2024-02-02T10:00:00Z',
         'asset': 'GBPUSD', 'direction': 'Sell', 'lotSize': 1, 'takeProfitPips': 20,
         'stopLossPips': 10, 'result': -150},
    ],
    'withdrawals': [
        {'id': 'w1', 'accountId': 'acc-1', 'amount': 100, 'date': '2024-02-03T00:00:00Z'},
    ],
    'theme': 'dark',
}


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / 'backup.json'
    path.write_text(json.dumps(SNAPSHOT), encoding='utf-8')
    return path


def write_config(tmp_path, zone):
    path = tmp_path / 'journal.yaml'
    path.write_text(f"timezone: {zone}\n", encoding='utf-8')
    return str(path)


class TestLoader:

    def test_load(self, snapshot_file):
        journal = load_snapshot(snapshot_file)

        assert len(journal.accounts) == 1
        assert len(journal.trades) == 2
        assert journal.withdrawals[0].amount == 100

    def test_withdrawals_optional(self):
        raw = {k: v for k, v in SNAPSHOT.items() if k != 'withdrawals'}
        assert parse_snapshot(raw).withdrawals == []

    def test_missing_core_data(self):
        with pytest.raises(SnapshotError):
            parse_snapshot({'accounts': []})

    def test_bad_record(self):
        raw = dict(SNAPSHOT, trades=[{'id': 'broken'}])
        with pytest.raises(SnapshotError):
            parse_snapshot(raw)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError):
            load_snapshot(tmp_path / 'nope.json')

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{not json', encoding='utf-8')
        with pytest.raises(SnapshotError):
            load_snapshot(path)


class TestSettings:

    def test_load_yaml(self, tmp_path):
        path = tmp_path / 'journal.yaml'
        path.write_text("timezone: Europe/Madrid\nlog_level: debug\n"
                        "currency_symbols:\n  CHF: Fr\n", encoding='utf-8')
        cfg = load_settings(str(path))

        assert cfg.timezone == 'Europe/Madrid'
        assert cfg.log_level == 'DEBUG'
        assert cfg.currency_symbol('CHF') == 'Fr'
        assert cfg.currency_symbol('USD') == '$'

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / 'other.yaml'
        path.write_text("timezone: UTC\n", encoding='utf-8')
        monkeypatch.setenv('JOURNAL_CONFIG', str(path))
        assert load_settings().timezone == 'UTC'

    def test_missing_env_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv('JOURNAL_CONFIG', str(tmp_path / 'missing.yaml'))
        assert load_settings() == Settings()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / 'missing.yaml'))

    def test_unknown_currency_falls_back_to_code(self):
        assert Settings().currency_symbol('CAD') == 'CAD'


class TestReportMain:

    def test_full_report(self, snapshot_file, capsys):
        assert main([str(snapshot_file), '--compare', 'strategy', '--today']) == 0
        out = capsys.readouterr().out

        assert 'PERFORMANCE REPORT' in out
        assert 'ACCOUNT RISK MONITOR' in out
        assert 'Challenge' in out
        assert 'Strategy Comparison' in out
        assert 'Final equity: $10,350.00' in out

    def test_account_filter_shows_trailing_floor(self, snapshot_file, capsys):
        assert main([str(snapshot_file), '--account', 'acc-1']) == 0
        out = capsys.readouterr().out

        # peak 10,600 - 500 limit
        assert 'Trailing drawdown floor: $10,100.00' in out

    def test_bad_snapshot(self, tmp_path):
        path = tmp_path / 'empty.json'
        path.write_text('{}', encoding='utf-8')
        assert main([str(path)]) == 1

    def test_asset_filter(self, snapshot_file, capsys):
        assert main([str(snapshot_file), '--asset', 'gbp']) == 0
        out = capsys.readouterr().out

        assert 'Trades:   1' in out
        assert 'Net P&L:             $     -150.00' in out

    def test_calendar(self, snapshot_file, tmp_path, capsys):
        cfg = write_config(tmp_path, 'UTC')
        assert main([str(snapshot_file), '--calendar', '2024-02', '--config', cfg]) == 0
        out = capsys.readouterr().out

        assert '--- Calendar 2024-02 ---' in out
        assert '2024-02-01  $    600.00  (1 trades)' in out
        assert '2024-02-02  $   -150.00  (1 trades)' in out

    def test_bad_calendar_month(self, snapshot_file):
        with pytest.raises(SystemExit):
            main([str(snapshot_file), '--calendar', '2024-13'])

    def test_today_uses_configured_zone(self, snapshot_file, tmp_path, capsys):
        cfg = write_config(tmp_path, 'Pacific/Kiritimati')
        assert main([str(snapshot_file), '--today', '--config', cfg]) == 0

        expected = datetime.now(ZoneInfo('Pacific/Kiritimati')).date()
        assert f"--- Today ({expected}) ---" in capsys.readouterr().out


class TestReportTimezone:

    # Sunday 23:30 UTC, Monday 08:30 in Tokyo
    AWARE = datetime(2024, 1, 7, 23, 30, tzinfo=timezone.utc)

    @pytest.fixture
    def late_sunday_file(self, tmp_path):
        trade = dict(SNAPSHOT['trades'][0], date=self.AWARE.isoformat(), result=7)
        path = tmp_path / 'late.json'
        path.write_text(json.dumps(dict(SNAPSHOT, trades=[trade])), encoding='utf-8')
        return path

    def test_null_zone_in_config_is_system_local(self, late_sunday_file, tmp_path,
                                                 monkeypatch, capsys):
        monkeypatch.setattr(settings, 'timezone', 'Asia/Tokyo')
        cfg = write_config(tmp_path, 'null')
        assert main([str(late_sunday_file), '--config', cfg]) == 0

        local = WEEKDAY_LABELS[(self.AWARE.astimezone().weekday() + 1) % 7]
        assert f"  {local:20s}: $      7.00" in capsys.readouterr().out

    def test_config_zone_overrides_settings(self, late_sunday_file, tmp_path,
                                            monkeypatch, capsys):
        monkeypatch.setattr(settings, 'timezone', 'UTC')
        cfg = write_config(tmp_path, 'Asia/Tokyo')
        assert main([str(late_sunday_file), '--config', cfg]) == 0

        assert f"  {'Mon':20s}: $      7.00" in capsys.readouterr().out

    def test_session_date(self):
        assert session_date('Asia/Tokyo') == datetime.now(ZoneInfo('Asia/Tokyo')).date()
        assert session_date(None) == datetime.now().date()
