# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create the development environment with uv."""
    ctx.run("uv venv")
    ctx.run("uv pip install -e '.[test,dev]'")


@task
def lint(ctx):
    """
    Static checks: ruff lint and format check, then mypy.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=homectl --cov-report=term-missing", pty=True)


@task
def serve(ctx, port=None):
    """Run the control server in the foreground."""
    cmd = "homectl serve"
    if port:
        cmd += f" --port {port}"
    ctx.run(cmd, pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel with uv.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")
