from unbundle.cli import app

app(prog_name='unbundle')
