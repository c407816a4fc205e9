from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def simulate(c, config="pelada.example.yaml", matches=8):
    c.run(f"python scripts/simulate_evening.py {config} --matches {matches}")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
