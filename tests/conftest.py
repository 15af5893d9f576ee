"""
Pytest configuration and shared fixtures
"""

import os
import shutil
import tempfile

import pytest

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def sample_text():
    """Sample text for testing"""
    return """The quick brown fox jumps over the lazy dog.
The dog was really lazy.
The fox was very quick and brown."""


@pytest.fixture
def sample_input_files(temp_dir):
    """Create two small input files for the client"""
    paths = []
    for name, content in [('f1.txt', 'hello world'), ('f2.txt', 'hello go')]:
        path = os.path.join(temp_dir, name)
        with open(path, 'w') as f:
            f.write(content)
        paths.append(path)
    return paths


@pytest.fixture
def wordcount_job_file():
    """Path to the bundled word count job"""
    return os.path.join(ROOT_DIR, 'localmr', 'wordcount.py')


@pytest.fixture
def inverted_index_job_file():
    """Path to inverted index example job file"""
    return os.path.join(ROOT_DIR, 'examples', 'inverted_index.py')
