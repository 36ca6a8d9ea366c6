import pytest

from session import BAD_COMMAND, COMMANDS, CommandParser


@pytest.fixture
def parser():
    return CommandParser()


def test_command_with_argument(parser):
    assert parser.parse('get notes.txt') == ('get', ['notes.txt'])

def test_whitespace_and_case_are_ignored(parser):
    assert parser.parse('  LS *.txt') == ('ls', ['*.txt'])
    assert parser.parse('\tCd   /pub/incoming  \n') == ('cd', ['/pub/incoming'])

def test_arguments_keep_their_order(parser):
    assert parser.parse('mput a.dat  b.dat c.dat') == ('mput', ['a.dat', 'b.dat', 'c.dat'])

def test_command_without_arguments(parser):
    assert parser.parse('pwd\n') == ('pwd', [])

@pytest.mark.parametrize('line', ['', '   ', '\n', '\t \t', None])
def test_blank_line_is_bad(parser, line):
    assert parser.parse(line) == (BAD_COMMAND, [])

@pytest.mark.parametrize('line', ['dir', 'lcd /tmp', 'delete x', 'getx a'])
def test_unknown_command_is_bad(parser, line):
    cmd, args = parser.parse(line)
    assert cmd == BAD_COMMAND
    assert args == []

def test_every_whitelisted_word_parses(parser):
    for word in COMMANDS:
        assert parser.parse(word.upper()) == (word, [])

def test_whitelist_is_fixed():
    assert COMMANDS == ('pwd', 'cd', 'ls', 'put', 'help',
                        'get', 'mget', 'mput', 'reconnect')
    assert CommandParser.commands is COMMANDS
