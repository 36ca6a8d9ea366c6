import os
import ftplib
import tempfile
from pathlib import Path

from tqdm import tqdm




FTP_PORT    = 21
BLOCKSIZE   = 8192


# https://stackoverflow.com/questions/287871/print-in-terminal-with-colors
ENDC        = '\033[0m'
BOLD        = '\033[1m'
ITALIC      = '\033[3m'
WARNING     = '\033[93m'


error_perm  = ftplib.error_perm         # 5xx errors
all_errors  = ftplib.all_errors         # (Error, OSError, EOFError)




class FTP(ftplib.FTP):
    '''ftplib.FTP plus the verbs the shell dispatches to.

    Transfers are always binary and draw a progress bar on stderr.
    '''

    def chdir(self, dirname):
        return self.cwd(dirname)

    def list(self, pattern=''):
        '''Return the LIST lines for pattern (default the current directory).'''
        lines = []
        self.dir(pattern, lines.append)
        return lines

    def size(self, filename):
        '''Size of a remote file in bytes, or None if the server won't say.'''
        self.voidcmd('TYPE I')
        # The SIZE command is defined in RFC-3659
        try:
            return super().size(filename)
        except error_perm:
            return None

    def get(self, remotefile, localfile=None, blocksize=BLOCKSIZE):
        '''Download into a temp file beside localfile, then move it into place.'''
        target = Path(localfile or Path(remotefile).name)
        total = self.size(remotefile)
        tmp = tempfile.NamedTemporaryFile(dir=target.parent, prefix=f'.{target.name}.',
                                          delete=False)
        try:
            with tmp as fp, \
                     progress(remotefile, total) as bar:
                def callback(data):
                    fp.write(data)
                    bar.update(len(data))
                resp = self.retrbinary(f'RETR {remotefile}', callback, blocksize=blocksize)
        except all_errors:
            os.unlink(tmp.name)
            raise
        os.replace(tmp.name, target)
        return resp

    def put(self, localfile, remotefile=None, blocksize=BLOCKSIZE):
        remotefile = remotefile or Path(localfile).name
        total = os.path.getsize(localfile)
        with open(localfile, 'rb') as fp, \
                 progress(localfile, total) as bar:
            return self.storbinary(f'STOR {remotefile}', fp, blocksize,
                                   callback=lambda buf: bar.update(len(buf)))


def open_session(host, user, passwd, port=FTP_PORT, debuglevel=0):
    '''Connect and log in, returning a ready FTP session.

    Raises one of all_errors on failure; the socket is closed first.
    '''
    ftp = FTP()
    ftp.set_debuglevel(debuglevel)
    try:
        ftp.connect(host, port)
        ftp.login(user=user, passwd=passwd)
    except all_errors:
        ftp.close()
        raise
    return ftp




def progress(name, total):
    return tqdm(total=total, desc=Path(name).name, unit='B',
                unit_scale=True, unit_divisor=1024, leave=False)

def print_warning(warning):
    print(f'{BOLD}{WARNING}{ITALIC}[ERROR] {warning}{ENDC}')

def print_info(info):
    print(f'{BOLD}{ITALIC}[INFO]  {info}{ENDC}')
