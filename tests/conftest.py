# tests/conftest.py
"""
Common test fixtures for sitewright.
"""
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest

from sitewright.config import BuildConfig


def python_command(code: str):
    """A command running `code` with the current interpreter, standing in for npm."""
    return [sys.executable, "-c", code]


INSTALL_OK = python_command("import os; os.makedirs('node_modules', exist_ok=True); print('added 3 packages')")
INSTALL_FAIL = python_command("import sys; sys.stderr.write('npm ERR! network'); sys.exit(1)")
BUILD_OK = python_command(
    "import os; os.makedirs('dist', exist_ok=True); "
    "open(os.path.join('dist', 'index.html'), 'w').write('<div id=app></div>'); "
    "print('built in 0.1s')"
)
BUILD_WARN = python_command("import sys; print('built'); sys.stderr.write('deprecation notice')")
BUILD_FAIL = python_command("import sys; sys.stderr.write('[vite] Build failed'); sys.exit(2)")
SLEEP = python_command("import time; time.sleep(30)")


@pytest.fixture
def fake_npm():
    """Commands standing in for npm install/build outcomes."""
    return SimpleNamespace(
        install_ok=INSTALL_OK,
        install_fail=INSTALL_FAIL,
        build_ok=BUILD_OK,
        build_warn=BUILD_WARN,
        build_fail=BUILD_FAIL,
        sleep=SLEEP,
    )


@pytest.fixture
def output_root():
    """Create a temporary output root."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "output"


@pytest.fixture
def download_dir():
    """Create a temporary download directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def build_config():
    """Build config whose install and build both succeed."""
    return BuildConfig(
        install_command=INSTALL_OK,
        build_command=BUILD_OK,
        install_timeout=30,
        build_timeout=30,
    )


@pytest.fixture
def failing_build_config():
    """Build config whose install and build both fail."""
    return BuildConfig(
        install_command=INSTALL_FAIL,
        build_command=BUILD_FAIL,
        install_timeout=30,
        build_timeout=30,
    )


@pytest.fixture
def sample_multi_file_response():
    return """Here is your page.

```html
<!DOCTYPE html>
<html><head><link rel="stylesheet" href="style.css"></head>
<body><h1>Todo</h1><script src="script.js"></script></body></html>
```

```css
body { margin: 0; }
```

```javascript
document.querySelector('h1').textContent = 'Todo list';
```

Enjoy!
"""
