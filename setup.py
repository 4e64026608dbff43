"""
Setup script for leaderboard-bot package with optional Cython compilation.

This builds the internal modules (_*/*.py) as compiled extensions when
Cython is available, while keeping the public API (runner.py, channel.py,
extractor.py, types.py, errors.py) as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import os

# Check if Cython is available
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False
    print("Cython not found. Building without compilation (source only).")

# Internal modules to compile with Cython
CYTHON_MODULES = [
    "src/leaderboard_bot/_store/file_lock.py",
    "src/leaderboard_bot/_store/snapshot_file.py",
    "src/leaderboard_bot/_store/conversation.py",
    "src/leaderboard_bot/_dispatch/router.py",
    "src/leaderboard_bot/_dispatch/replies.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    if not USE_CYTHON:
        return []

    extensions = []
    for module_path in CYTHON_MODULES:
        if os.path.exists(module_path):
            # src/leaderboard_bot/_store/foo.py -> leaderboard_bot._store.foo
            module_name = module_path.replace("src/", "").replace("/", ".").replace(".py", "")
            extensions.append(
                Extension(
                    name=module_name,
                    sources=[module_path],
                )
            )
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized if Cython is available."""
    extensions = get_extensions()
    if not extensions:
        return []

    return cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "boundscheck": False,
            "wraparound": False,
        },
        nthreads=os.cpu_count() or 1,
    )


ext_modules = get_ext_modules() if USE_CYTHON else []

setup(
    name="leaderboard-bot",
    version="1.0.0",
    description="Chat-driven game leaderboard with locked JSON storage and LLM intent extraction",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "anthropic>=0.18.0",
        "portalocker>=2.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx",
        ],
        "dev": [
            "cython>=3.0",
            "build",
            "wheel",
            "pytest>=7.0",
        ],
    },
    package_data={
        "leaderboard_bot": ["*.so", "*.pyd", "_store/*.so", "_store/*.pyd",
                            "_dispatch/*.so", "_dispatch/*.pyd"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
