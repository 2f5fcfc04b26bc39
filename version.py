"""
keeps the package version file in sync with `git describe`

"""
from __future__ import annotations

import os
import re
import subprocess

VERSION_RE = re.compile(r"""^__version__\s*=\s*['"]([^'"]+)['"]""", re.MULTILINE)
RELEASE_TAG_RE = re.compile(r"^\d+\.\d+\.\d+$")


def pep440ify(git_describe_version: str) -> str:
    """Turn `git describe` output such as 1.2.0-3-gabcdef into a PEP 440 version"""
    if not git_describe_version or RELEASE_TAG_RE.match(git_describe_version):
        return git_describe_version
    parts = git_describe_version.split("-")
    if len(parts) == 3:
        version, _commits, sha = parts
        return f"{version}+{sha}"
    # untagged checkout, describe --always only gives the sha
    return f"0.0.0+{git_describe_version}"


def _read_file_version(version_file: str) -> str | None:
    try:
        with open(version_file, encoding="utf-8") as fp:
            match = VERSION_RE.search(fp.read())
    except OSError:
        return None
    return match.group(1) if match else None


def _git_version() -> str | None:
    try:
        proc = subprocess.run(["git", "describe", "--always", "--tags"], capture_output=True, check=False)
    except OSError:
        return None
    if proc.returncode != 0 or not proc.stdout:
        return None
    return pep440ify(proc.stdout.splitlines()[0].strip().decode("utf-8"))


def get_project_version(version_file: str) -> str:
    version_file = os.path.join(os.path.dirname(os.path.realpath(__file__)), version_file)
    file_ver = _read_file_version(version_file)
    git_ver = _git_version()

    if git_ver and git_ver != file_ver:
        with open(version_file, "w", encoding="utf-8") as fp:
            fp.write("__version__ = '%s'\n" % git_ver)
        return git_ver

    if not file_ver:
        raise Exception("version not available from git or from file %r" % version_file)

    return file_ver


if __name__ == "__main__":
    import sys

    get_project_version(sys.argv[1])
