"""Test the formatting pass."""

import subprocess
from unittest.mock import patch

import pytest

from unbundle.config import FormatterKind
from unbundle.exceptions import FormattingError
from unbundle.splitting.formatter import (
    CommandFormatter,
    PassthroughFormatter,
    get_formatter,
)

SOURCE = b'package widgets\n\nfunc  Foo( ) {}\n'


def completed(returncode=0, stdout=b'', stderr=b''):
    return subprocess.CompletedProcess(
        args=['goimports'], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestGetFormatter:
    """Test formatter selection."""

    def test_goimports(self):
        formatter = get_formatter(FormatterKind.GOIMPORTS)
        assert isinstance(formatter, CommandFormatter)
        assert formatter.command == ['goimports']

    def test_gofmt_from_string(self):
        formatter = get_formatter('gofmt')
        assert isinstance(formatter, CommandFormatter)
        assert formatter.command == ['gofmt']

    def test_none(self):
        assert isinstance(get_formatter(FormatterKind.NONE), PassthroughFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_formatter('clang-format')


class TestPassthroughFormatter:
    def test_returns_source(self):
        assert PassthroughFormatter().format('a.go', SOURCE) == SOURCE


class TestCommandFormatter:
    """Test CommandFormatter."""

    @patch('unbundle.splitting.formatter.subprocess.run')
    @patch('unbundle.splitting.formatter.shutil.which')
    def test_formats_through_stdin(self, mock_which, mock_run):
        mock_which.return_value = '/usr/bin/goimports'
        mock_run.return_value = completed(stdout=b'formatted')

        result = CommandFormatter(['goimports', '-local', 'x']).format(
            'widget.go', SOURCE
        )

        assert result == b'formatted'
        mock_which.assert_called_once_with('goimports')
        args, kwargs = mock_run.call_args
        assert args[0] == ['/usr/bin/goimports', '-local', 'x']
        assert kwargs['input'] == SOURCE
        assert kwargs['check'] is False

    @patch('unbundle.splitting.formatter.shutil.which')
    def test_missing_executable(self, mock_which):
        mock_which.return_value = None

        with pytest.raises(FormattingError, match='not found in PATH') as exc_info:
            CommandFormatter(['goimports']).format('widget.go', SOURCE)

        assert exc_info.value.filename == 'widget.go'

    @patch('unbundle.splitting.formatter.subprocess.run')
    @patch('unbundle.splitting.formatter.shutil.which')
    def test_rejected_source(self, mock_which, mock_run):
        mock_which.return_value = '/usr/bin/goimports'
        mock_run.return_value = completed(
            returncode=2, stderr=b'<standard input>:3:7: expected declaration\n'
        )

        with pytest.raises(FormattingError) as exc_info:
            CommandFormatter(['goimports']).format('widget.go', SOURCE)

        assert exc_info.value.reason == 'widget.go:3:7: expected declaration'
        assert "Failed to format 'widget.go'" in str(exc_info.value)

    @patch('unbundle.splitting.formatter.subprocess.run')
    @patch('unbundle.splitting.formatter.shutil.which')
    def test_timeout(self, mock_which, mock_run):
        mock_which.return_value = '/usr/bin/gofmt'
        mock_run.side_effect = subprocess.TimeoutExpired(cmd='gofmt', timeout=1)

        with pytest.raises(FormattingError) as exc_info:
            CommandFormatter(['gofmt'], timeout=1).format('widget.go', SOURCE)

        assert isinstance(exc_info.value.cause, subprocess.TimeoutExpired)
        assert mock_run.call_args.kwargs['timeout'] == 1

    @patch('unbundle.splitting.formatter.subprocess.run')
    @patch('unbundle.splitting.formatter.shutil.which')
    def test_os_error(self, mock_which, mock_run):
        mock_which.return_value = '/usr/bin/gofmt'
        mock_run.side_effect = PermissionError('denied')

        with pytest.raises(FormattingError, match='denied'):
            CommandFormatter(['gofmt']).format('widget.go', SOURCE)
