from __future__ import annotations

from unittest.mock import MagicMock, patch

from find_uos_codes.services.progress import LookupProgress, is_tty_enabled


def test_is_tty_enabled_follows_stderr():
    with patch("sys.stderr.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stderr.isatty", return_value=False):
        assert is_tty_enabled() is False


def test_progress_disabled_without_tty():
    with patch("find_uos_codes.services.progress.is_tty_enabled", return_value=False):
        with LookupProgress(3) as progress:
            progress.advance("r1006349")
            assert progress.pbar is None
    assert progress.done == 1


def test_progress_disabled_for_zero_records():
    with patch("find_uos_codes.services.progress.is_tty_enabled", return_value=True):
        progress = LookupProgress(0)
    assert progress.enabled is False


@patch("find_uos_codes.services.progress.tqdm")
def test_progress_bar_updates_and_closes(mock_tqdm):
    bar = MagicMock()
    mock_tqdm.return_value = bar
    with patch("find_uos_codes.services.progress.is_tty_enabled", return_value=True):
        with LookupProgress(2) as progress:
            progress.advance("r1006349")
            progress.advance("r1006350")
    assert bar.update.call_count == 2
    bar.set_postfix.assert_called_with(record="r1006350", refresh=False)
    bar.close.assert_called_once()
    assert mock_tqdm.call_args.kwargs["total"] == 2
