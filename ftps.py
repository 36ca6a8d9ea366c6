import re
import sys
import argparse
import functools
from getpass import getpass

import ftp
from session import BAD_COMMAND, COMMANDS, IDLE_TIMEOUT, CommandParser, Session




PROMPT  = '>> '
USAGE   = 'Usage: ftps [options] ftp-host'
_exit_re = re.compile(r'quit|exit', re.IGNORECASE)




class Repl:
    def __init__(self, session, read_line=input):
        self.session    = session
        self.parser     = CommandParser()
        self.read_line  = read_line

    def run(self):
        self.session.connect()
        while True:
            try:
                line = self.read_line(PROMPT)
            except EOFError:
                print()
                break
            if _exit_re.search(line):
                break
            cmd, args = self.parser.parse(line)
            if cmd == BAD_COMMAND:
                print('Bad command')
                print(f'Please provide one of: {", ".join(COMMANDS)}')
            else:
                self.session.execute(cmd, args)
        print('Quit')
        self.session.destroy()




def build_parser():
    parser = argparse.ArgumentParser(prog='ftps', usage='ftps [options] ftp-host',
                                     description='Interactive FTP client')
    parser.add_argument('hosts', nargs='*', metavar='ftp-host')
    parser.add_argument('--user', '-u')
    parser.add_argument('--password', '-p')
    parser.add_argument('--port', '-P', type=int, default=ftp.FTP_PORT)
    parser.add_argument('--timeout', '-t', type=float, default=IDLE_TIMEOUT,
                        help='idle seconds before reconnecting (default %(default)s)')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='print the FTP control conversation')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if len(args.hosts) != 1:
        print(USAGE)
        sys.exit(1)

    user = args.user
    if user is None:
        user = input('Please enter a username: ')
    passwd = args.password
    if passwd is None:
        passwd = getpass('Please enter your password: ')

    connector = functools.partial(ftp.open_session, port=args.port,
                                  debuglevel=int(args.debug))
    session = Session(args.hosts[0], user.strip(), passwd.rstrip('\r\n'),
                      timeout=args.timeout, connector=connector)
    Repl(session).run()


if __name__ == '__main__':
    main()
