import sys
from subprocess import run


def test_launch_as_module_success():

    # make sure to provide a valid redwall command or the return code won't be zero
    result = run([sys.executable, "-m", "redwall", "--help"], capture_output=True, text=True)
    assert result.returncode == 0
    assert "candidates" in result.stdout
