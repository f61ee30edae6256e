from cf_purge import cf, config
from cf_purge.models.settings import env
from cf_purge.utils.log import setup_logging
import typer
from typing_extensions import Annotated

app = typer.Typer(no_args_is_help=True)
app.add_typer(cf.app, name="cf")
app.add_typer(config.app, name="config")


@app.callback()
def main(verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False):
    if verbose:
        env.verbose = True
    setup_logging()
