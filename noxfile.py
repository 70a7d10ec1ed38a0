"""Nox sessions for testing and linting the verifier bot."""

import nox

nox.options.sessions = ["tests", "lint"]
python_versions = ["3.11", "3.12"]
source_paths = ["verifier_bot", "tests", "bot.py", "noxfile.py"]


@nox.session(python=python_versions)
def tests(session):
    """Run the test suite with coverage."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        "--cov=verifier_bot",
        "--cov-report=term-missing",
        "--cov-report=xml:coverage.xml",
        "--cov-fail-under=80",
        "-v",
        *session.posargs,
    )


@nox.session(python=python_versions[0])
def lint(session):
    """Run ruff checks and verify formatting."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "check", *source_paths)
    session.run("ruff", "format", "--check", *source_paths)


@nox.session(python=python_versions[0])
def format_code(session):
    """Format code with ruff."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "format", *source_paths)
    session.run("ruff", "check", "--fix", *source_paths)


@nox.session(python=python_versions[0])
def coverage_report(session):
    """Generate an HTML branch-coverage report."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        "--cov=verifier_bot",
        "--cov-branch",
        "--cov-report=html:htmlcov",
        "--tb=short",
    )
    session.log("Coverage report generated in htmlcov/ directory")


@nox.session(python=python_versions[0])
def test_single(session):
    """Run a single test file or test function."""
    if not session.posargs:
        session.error("Please provide a test file or function to run")

    session.install("-e", ".[dev]")
    session.run("pytest", "-v", *session.posargs)
