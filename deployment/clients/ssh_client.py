import io
import socket
import logging
import posixpath

import paramiko
from paramiko.hostkeys import HostKeyEntry, InvalidHostKey

from deployment.errors import RemoteCommandError, RemoteConnectionError
from deployment.models import RemoteTarget

logger = logging.getLogger(__name__)

KEY_TYPES: tuple[type[paramiko.PKey], ...] = (paramiko.Ed25519Key, paramiko.ECDSAKey, paramiko.RSAKey)


def load_private_key(material: str) -> paramiko.PKey:
    for key_type in KEY_TYPES:
        try:
            return key_type.from_private_key(io.StringIO(material))
        except paramiko.PasswordRequiredException as e:
            raise RemoteConnectionError("Passphrase-protected private keys are not supported") from e
        except paramiko.SSHException:
            continue
    raise RemoteConnectionError("Unsupported or malformed private key")


def load_known_hosts(host_keys: paramiko.HostKeys, text: str) -> int:
    """Add known_hosts formatted lines to ``host_keys``, returning how many entries were read."""
    count = 0
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            entry = HostKeyEntry.from_line(line, lineno=number)
        except (InvalidHostKey, paramiko.SSHException) as e:
            raise RemoteConnectionError(f"Invalid known_hosts entry on line {number}") from e
        if entry is None:
            raise RemoteConnectionError(f"Unsupported known_hosts entry on line {number}")
        for hostname in entry.hostnames:
            host_keys.add(hostname, entry.key.get_name(), entry.key)
        count += 1
    if not count:
        raise RemoteConnectionError("SSH_KNOWN_HOSTS holds no host keys")
    return count


class SSHClient:
    """SSH/SFTP channel to a single deployment host. Nothing is retried."""

    def __init__(self, target: RemoteTarget, timeout: float = 10):
        self.target: RemoteTarget = target
        self.timeout: float = timeout
        self.client: paramiko.SSHClient = paramiko.SSHClient()
        if target.known_hosts:
            load_known_hosts(self.client.get_host_keys(), target.known_hosts)
            self.client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    def __enter__(self) -> "SSHClient":
        self.connect()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def connect(self) -> None:
        key = load_private_key(self.target.private_key)
        address = f"{self.target.user}@{self.target.host}:{self.target.port}"
        try:
            self.client.connect(
                self.target.host,
                port=self.target.port,
                username=self.target.user,
                pkey=key,
                timeout=self.timeout,
                allow_agent=False,
                look_for_keys=False,
            )
        except paramiko.AuthenticationException as e:
            self.close()
            raise RemoteConnectionError(f"Authentication rejected for {address}") from e
        except (paramiko.SSHException, socket.error) as e:
            self.close()
            raise RemoteConnectionError(f"Could not connect to {address}: {e}") from e
        logger.info(f"Connected to {address}")

    def close(self) -> None:
        self.client.close()

    def run(self, cmd: str) -> str:
        logger.info(f"[{self.target.host}] Running: {cmd}")
        try:
            _, stdout, stderr = self.client.exec_command(cmd)
            exit_code = stdout.channel.recv_exit_status()
            out = stdout.read().decode().strip()
            err = stderr.read().decode().strip()
        except (paramiko.SSHException, socket.error) as e:
            raise RemoteConnectionError(f"Lost connection to {self.target.host}: {e}") from e
        if exit_code != 0:
            raise RemoteCommandError(f"Command failed: {cmd}\nError: {err}", exit_code=exit_code)
        return out

    def upload_file(self, content: str, remote_path: str) -> None:
        logger.info(f"[{self.target.host}] Uploading {remote_path}")
        try:
            sftp = self.client.open_sftp()
            try:
                with sftp.file(remote_path, "w") as f:
                    f.write(content)
            finally:
                sftp.close()
        except (OSError, paramiko.SSHException) as e:
            raise RemoteCommandError(f"Transfer of {posixpath.basename(remote_path)} failed: {e}") from e
