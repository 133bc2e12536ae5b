from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from points_import.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    """is_tty_enabled mirrors sys.stdout.isatty()."""
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """ProgressTracker with and without a terminal."""

    def test_init_with_tty_enabled(self):
        with patch('points_import.services.progress.is_tty_enabled', return_value=True), \
             patch('points_import.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Test files")

            assert tracker.total_files == 5
            assert tracker.current_file == 0
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Test files",
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('points_import.services.progress.is_tty_enabled', return_value=False), \
             patch('points_import.services.progress.tqdm') as mock_tqdm:
            tracker = ProgressTracker(5)

            assert tracker.enabled is False
            assert tracker.pbar is None
            mock_tqdm.assert_not_called()

    def test_start_and_finish_file(self):
        mock_pbar = Mock()

        with patch('points_import.services.progress.is_tty_enabled', return_value=True), \
             patch('points_import.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(3, description="Importing")
            tracker.start_file(Path("vendas.xlsx"))
            assert tracker.current_file == 1
            mock_pbar.set_description.assert_called_with("Importing (vendas.xlsx)")

            tracker.finish_file(valid_rows=9, error_rows=1)
            tracker.finish_file(valid_rows=5)

            assert mock_pbar.update.call_count == 2
            mock_pbar.set_description.assert_called_with("Importing")
            mock_pbar.set_postfix.assert_called_with(valid=14, errors=1)

    def test_without_tty_counts_still_accumulate(self):
        with patch('points_import.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(2)
            tracker.start_file(Path("a.xlsx"))
            tracker.finish_file(3, 2)
            tracker.finish_file()

            assert tracker.current_file == 1
            assert (tracker.valid_rows, tracker.error_rows) == (3, 2)

    def test_context_manager_closes_bar(self):
        mock_pbar = Mock()

        with patch('points_import.services.progress.is_tty_enabled', return_value=True), \
             patch('points_import.services.progress.tqdm', return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                pass

            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
            tracker.close()
            mock_pbar.close.assert_called_once()
