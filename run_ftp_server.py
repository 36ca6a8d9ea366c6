# https://github.com/giampaolo/pyftpdlib

import argparse

from pyftpdlib.authorizers import DummyAuthorizer
from pyftpdlib.handlers import FTPHandler
from pyftpdlib.servers import FTPServer


def make_server(username, password, root, host='127.0.0.1', port=8821,
                perm='elradfmwMT'):
    '''Build (but don't start) a single-user FTP server rooted at root.'''
    authorizer = DummyAuthorizer()
    authorizer.add_user(username, password, str(root), perm=perm)

    # subclass so the authorizer isn't set on the shared FTPHandler
    handler = type('Handler', (FTPHandler,), {'authorizer': authorizer})
    return FTPServer((host, port), handler)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Run Local FTP Server')
    parser.add_argument('--username', '-u', default='username')
    parser.add_argument('--password', '-p', default='password')
    parser.add_argument('--root', '-r', default='/')
    parser.add_argument('--port', '-P', type=int, default=8821)
    args = parser.parse_args(argv)

    server = make_server(args.username, args.password, args.root, port=args.port)
    server.serve_forever()


if __name__ == '__main__':
    main()
