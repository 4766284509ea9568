import platform
import sys
from setuptools import setup


def permit_setup():
    """
    Determines whether setup is permitted:
    - CPython >= 3.8+
    - PyPy >= 3.8+
    :return: True if setup is allowed
    """
    implementation = platform.python_implementation()
    v = sys.version_info  # pylint: disable=C0103, invalid-name

    return any([
        all([implementation == 'CPython', v.major == 3, v.minor >= 8]),
        all([implementation == 'PyPy', v.major == 3, v.minor >= 8]),
    ])

if permit_setup():
    setup()
else:
    raise RuntimeError('CPython 3.8+ or PyPy 3.8+ required')
