# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""Credentials for signing EC2 Query API requests."""

import configparser
import os

import attr

from txec2.exception import CredentialsNotFoundError
from txec2.util import hmac_sha256


__all__ = ["AWSCredentials"]


ENV_ACCESS_KEY = "AWS_ACCESS_KEY_ID"
ENV_PROFILE = "AWS_PROFILE"
ENV_SECRET_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SHARED_CREDENTIALS_FILE = "AWS_SHARED_CREDENTIALS_FILE"


@attr.s(init=False, frozen=True)
class AWSCredentials(object):
    """Create an AWSCredentials object.

    @param access_key: The access key to use. If empty the environment
        variable AWS_ACCESS_KEY_ID is consulted, then the shared
        credentials file.
    @param secret_key: The secret key to use. If empty the environment
        variable AWS_SECRET_ACCESS_KEY is consulted, then the shared
        credentials file.
    @param environ: The environment. If unspecified, L{os.environ} is used.
    @raise CredentialsNotFoundError: No access key or secret was provided, nor
        could they be found in the environment or filesystem.
    """

    access_key = attr.ib()
    secret_key = attr.ib(repr=False)

    def __init__(self, access_key="", secret_key="", environ=os.environ):
        if not access_key:
            access_key = environ.get(ENV_ACCESS_KEY)
            if not access_key:
                access_key, _ = _load_shared_credentials(environ=environ)
        if not secret_key:
            secret_key = environ.get(ENV_SECRET_KEY)
            if not secret_key:
                _, secret_key = _load_shared_credentials(environ=environ)
        if not (access_key and secret_key):
            raise CredentialsNotFoundError(
                "Both an access key and a secret key are required")

        object.__setattr__(self, "access_key", access_key)
        object.__setattr__(self, "secret_key", secret_key)

    def sign(self, text):
        """Sign some text, returning the base64 HMAC-SHA256 digest."""
        return hmac_sha256(self.secret_key, text)


def _load_shared_credentials(environ, profile=None):
    if profile is None:
        profile = environ.get(ENV_PROFILE, "default")

    credentials_path = environ.get(
        ENV_SHARED_CREDENTIALS_FILE,
        os.path.expanduser("~/.aws/credentials"),
    )
    config = configparser.ConfigParser()
    if not config.read([credentials_path]):
        raise CredentialsNotFoundError(
            "Could not find credentials in the environment or filesystem",
        )

    if not config.has_section(profile):
        raise CredentialsNotFoundError("No such profile {!r}".format(profile))

    try:
        return (
            config.get(profile, "aws_access_key_id"),
            config.get(profile, "aws_secret_access_key"),
        )
    except configparser.NoOptionError as error:
        raise CredentialsNotFoundError(
            "Profile {0.section!r} has no {0.option!r}".format(error),
        )
