import ftplib
import posixpath
import threading
from types import SimpleNamespace

import pytest

from run_ftp_server import make_server


class FakeFTP:
    '''Collaborator double that records every call.

    fail maps a verb, or a (verb, arg) pair, to the exception it should raise.
    '''

    def __init__(self, cwd='/home/user', listing=(), fail=None):
        self.cwd = cwd
        self.listing = list(listing)
        self.fail = dict(fail or {})
        self.calls = []

    def _call(self, verb, *args):
        self.calls.append((verb,) + args)
        for key in ((verb,) + args, verb):
            if key in self.fail:
                raise self.fail[key]

    def pwd(self):
        self._call('pwd')
        return self.cwd

    def chdir(self, path):
        self._call('chdir', path)
        self.cwd = posixpath.normpath(posixpath.join(self.cwd, path))

    def list(self, pattern=''):
        self._call('list', pattern)
        return list(self.listing)

    def get(self, name):
        self._call('get', name)

    def put(self, name):
        self._call('put', name)

    def quit(self):
        self._call('quit')

    def close(self):
        self._call('close')


class FakeConnector:
    '''Hands out a fresh FakeFTP per login, like a real server would.'''

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.sessions = []
        self.logins = []
        self.error = None

    def __call__(self, host, user, passwd):
        self.logins.append((host, user, passwd))
        if self.error is not None:
            raise self.error
        conn = FakeFTP(**self.kwargs)
        self.sessions.append(conn)
        return conn


def error_perm(msg='550 Failed'):
    return ftplib.error_perm(msg)


@pytest.fixture
def ftp_server(tmp_path):
    root = tmp_path / 'remote'
    root.mkdir()
    server = make_server('user', 'secret', root, port=0)
    port = server.socket.getsockname()[1]
    stop = threading.Event()

    def serve():
        while not stop.is_set():
            server.serve_forever(timeout=0.05, blocking=False)
        server.close_all()

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    yield SimpleNamespace(host='127.0.0.1', port=port, root=root,
                          user='user', password='secret')
    stop.set()
    thread.join(5)
