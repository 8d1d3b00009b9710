import pytest

from sysloggen.main import apply_arguments, build_parser, main
from sysloggen.config import load_config


@pytest.fixture(autouse=True)
def no_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def parse(*argv):
    return build_parser().parse_args(list(argv))


def test_positional_arguments():
    args = parse('10.0.0.1', '514', '1000', '4')

    assert args.destination == '10.0.0.1'
    assert args.port == 514
    assert args.message_count == 1000
    assert args.worker_count == 4


def test_short_options():
    args = parse('10.0.0.1', '514', '10', '2', '-s', '10.0.0.9',
                 '-f', 'msgs.txt', '-h', 'hosts.txt', '-d', '15')

    assert args.source_ip == '10.0.0.9'
    assert args.message_file == 'msgs.txt'
    assert args.host_file == 'hosts.txt'
    assert args.delay_ms == 15


@pytest.mark.parametrize('argv', [
    ['10.0.0.1', '514', '10'],
    ['10.0.0.1', '514', '10', '2', '-s', '1.1.1.1', '-S', 'ips.txt'],
    ['10.0.0.1', '514', '10', '2', '-f'],
    ['10.0.0.1', 'port', '10', '2'],
])
def test_usage_errors_exit_non_zero(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code != 0


def test_command_line_overrides_config(write_lines):
    path = write_lines('config.yaml', "output:\n  source_ip_file: ips.txt\n")
    args = parse('10.0.0.1', '514', '10', '2', '-s', '10.0.0.9', '-q', '--config', path)

    config = apply_arguments(load_config(args.config), args)

    assert config.output.source_ip == '10.0.0.9'
    assert config.output.source_ip_file is None
    assert config.output.echo is False


def test_missing_message_file_fails(tmp_path):
    assert main(['127.0.0.1', '5140', '1', '1', '-f', str(tmp_path / 'nope.txt')]) == 1


def test_invalid_destination_fails():
    assert main(['not-an-ip', '5140', '1', '1']) == 1


def test_zero_workers_fails():
    assert main(['127.0.0.1', '5140', '1', '0']) == 1


def test_full_run(udp_receiver, drain, write_lines, capsys):
    host, port = udp_receiver.getsockname()
    messages = write_lines('messages.txt', "link down\nlink up\n")
    hosts = write_lines('hosts.txt', "sw01\n")

    exit_code = main([host, str(port), '9', '2', '-f', messages, '-h', hosts])

    received = drain(udp_receiver, 9)
    out = capsys.readouterr().out
    assert exit_code == 0
    assert len(received) == 9
    assert all(" sw01 sysloggen: link " in datagram for datagram in received)
    assert out.count("Sending: <11>") == 9
    assert f"Sent 9 messages to {host}:{port}." in out
    assert "Messages per second:" in out


def test_quiet_run_prints_only_summary(udp_receiver, capsys):
    host, port = udp_receiver.getsockname()

    assert main([host, str(port), '3', '3', '--quiet']) == 0

    out = capsys.readouterr().out
    assert "Sending:" not in out
    assert "Sent 3 messages" in out


def test_explicit_missing_config_fails(tmp_path):
    assert main(['127.0.0.1', '5140', '1', '1', '--config', str(tmp_path / 'missing.yaml')]) == 1


def test_string_delay_in_config_fails(write_lines):
    path = write_lines('custom.yaml', "generator:\n  delay_ms: \"5\"\n")

    assert main(['127.0.0.1', '5140', '1', '1', '--config', path]) == 1
