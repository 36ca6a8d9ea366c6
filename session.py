import sys
import glob
import threading

import ftp
from ftp import print_info, print_warning




IDLE_TIMEOUT    = 60
BAD_COMMAND     = 'bad'
COMMANDS        = ('pwd', 'cd', 'ls', 'put', 'help',
                   'get', 'mget', 'mput', 'reconnect')




class IdleTimer:
    '''One-shot idle countdown.

    The timer is "running" from tick() until the countdown fires or stop() is
    called. All state changes happen under a single lock that the countdown
    thread takes too, and reset() holds it across stop and tick.
    '''

    def __init__(self, timeout=IDLE_TIMEOUT):
        self.timeout    = timeout
        self.running    = False
        self._lock      = threading.Lock()
        self._timer     = None
        self._gen       = 0

    def tick(self):
        with self._lock:
            self._tick()

    def expired(self):
        with self._lock:
            return not self.running

    def reset(self):
        with self._lock:
            self._stop()
            self._tick()

    def stop(self):
        with self._lock:
            self._stop()

    def _tick(self):
        self._stop()
        self._gen += 1
        self.running = True
        self._timer = threading.Timer(self.timeout, self._fire, args=(self._gen,))
        self._timer.daemon = True
        self._timer.start()

    def _stop(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.running = False

    def _fire(self, gen):
        with self._lock:
            # a countdown cancelled while waiting on the lock is stale
            if gen == self._gen:
                self.running = False
                self._timer = None




class CommandParser:
    commands = COMMANDS

    def parse(self, line):
        '''Split line into (tag, args). Never raises.'''
        parts = (line or '').split()
        if not parts:
            return BAD_COMMAND, []
        cmd = parts[0].lower()
        if cmd not in self.commands:
            return BAD_COMMAND, []
        return cmd, parts[1:]




class Session:
    '''A logged-in FTP session that survives idle disconnects.

    connector(host, user, passwd) must return an object with pwd, chdir,
    list, get, put, quit and close, raising ftp.all_errors on failure.
    '''

    def __init__(self, host, username, password,
                 timeout=IDLE_TIMEOUT, connector=ftp.open_session):
        self.host           = host
        self.username       = username
        self.password       = password
        self.timeout        = timeout
        self.last_directory = None
        self.connection     = None
        self.timer          = None
        self._connector     = connector

    @property
    def connected(self):
        return self.connection is not None

    def connect(self):
        try:
            self.connection = self._connector(self.host, self.username, self.password)
            if self.last_directory is None:
                self.last_directory = self.connection.pwd()
            else:
                self.connection.chdir(self.last_directory)
        except ftp.all_errors as ex:
            print_warning(f'Exception happened: {ex}')
            print_warning('Aborting...')
            sys.exit(1)

        if self.timer is None:
            self.timer = IdleTimer(self.timeout)
        self.timer.reset()

    def disconnect(self):
        if self.connection is None:
            return
        # the link may already be gone; stay quiet
        __, err = attempt(self.connection.quit)
        if err is not None:
            attempt(self.connection.close)
        self.connection = None

    def reconnect(self):
        self.disconnect()
        self.connect()

    def execute(self, cmd, args):
        if self.timer.expired():
            self.reconnect()
        else:
            self.timer.reset()

        arg = ' '.join(args or [])
        handler = getattr(self, f'do_{cmd}', None)
        if cmd in COMMANDS and handler is not None:
            handler(arg)

    def destroy(self):
        if self.timer is not None:
            self.timer.stop()
        # no QUIT: the control connection is left open

    # commands

    def do_pwd(self, arg):
        print_info(f'PWD = {self.last_directory}')

    def do_cd(self, arg):
        __, err = attempt(self.connection.chdir, arg)
        if err is None:
            cwd, err = attempt(self.connection.pwd)
        if err is not None:
            print_warning(f'Cannot change directory to {arg} - {err}')
            return
        self.last_directory = cwd
        print_info(f'PWD = {cwd}')

    def do_ls(self, arg):
        lines, err = attempt(self.connection.list, arg)
        if err is not None:
            print_warning(f'Could not do that - {err}')
            return
        for line in lines:
            print(line)

    def do_get(self, arg):
        __, err = attempt(self.connection.get, arg)
        if err is not None:
            print_warning(f'Cannot GET - {err}')

    def do_put(self, arg):
        __, err = attempt(self.connection.put, arg)
        if err is not None:
            print_warning(f'Cannot PUT - {err}')

    def do_mget(self, arg):
        lines, err = attempt(self.connection.list, arg)
        if err is None:
            names = [line.split()[-1] for line in lines if line.strip()]
            err = self._batch(self.connection.get, names, 'getting')
        if err is not None:
            print_warning(f'MGET failed - {err}')

    def do_mput(self, arg):
        names = sorted(glob.glob(arg))
        err = self._batch(self.connection.put, names, 'putting')
        if err is not None:
            print_warning(f'MPUT failed - {err}')

    def do_help(self, arg):
        print(' '.join(COMMANDS))

    def do_reconnect(self, arg):
        self.reconnect()
        print_info('Reconnect done')

    def _batch(self, transfer, names, verb):
        '''Transfer names in order; stop at and return the first error.'''
        for name in names:
            print(f'\t{verb} {name}')
            __, err = attempt(transfer, name)
            if err is not None:
                return err
        return None




def attempt(func, *args):
    '''Call func, returning (result, None) or (None, error) for FTP errors.'''
    try:
        return func(*args), None
    except ftp.all_errors as ex:
        return None, ex
