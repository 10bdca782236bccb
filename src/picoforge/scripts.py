# filename : scripts.py
# created  : 10/19/2026


import logging

import click

from picoforge.core.smartcard import logging as sc_logging

lg = logging.getLogger(__name__)


def _run(ctx: click.Context, action: str, **kwargs) -> None:
    from picoforge.app.main import main
    ctx.exit(main(action, service=ctx.obj, **kwargs))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="TRACE level (show raw APDUs).")
@click.option("-q", "--quiet", is_flag=True, help="Only warnings and errors.")
@click.pass_context
def picoforge(ctx, verbose, quiet):
    """Configure a Pico FIDO key through its rescue applet."""
    sc_logging.configure(verbose=verbose, quiet=quiet)


@picoforge.command()
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@click.pass_context
def info(ctx, as_json):
    """Show serial, firmware version and flash usage."""
    _run(ctx, "info", as_json=as_json)


@picoforge.command()
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@click.pass_context
def status(ctx, as_json):
    """Show device info, PHY configuration and secure boot state."""
    _run(ctx, "status", as_json=as_json)


@picoforge.command()
@click.option("--vid", default=None, help="USB vendor ID (hex). Needs --pid.")
@click.option("--pid", default=None, help="USB product ID (hex). Needs --vid.")
@click.option("--product", "product_name", default=None, help="USB product string.")
@click.option("--led-gpio", type=click.IntRange(0, 255), default=None, help="LED GPIO pin.")
@click.option("--led-brightness", type=click.IntRange(0, 255), default=None, help="LED brightness.")
@click.option("--led-driver", type=click.IntRange(0, 255), default=None, help="LED driver.")
@click.option("--touch-timeout", type=click.IntRange(0, 255), default=None,
              help="Presence button timeout (seconds).")
@click.option("--led-dimmable/--no-led-dimmable", default=None,
              help="LED dimmable. Written only with --led-steady and --power-cycle-on-reset.")
@click.option("--power-cycle-on-reset/--no-power-cycle-on-reset", default=None,
              help="Power cycle on reset. Written only with the other LED options.")
@click.option("--led-steady/--no-led-steady", default=None,
              help="LED steady. Written only with --led-dimmable and --power-cycle-on-reset.")
@click.option("--secp256k1/--no-secp256k1", "enable_secp256k1", default=None,
              help="Enable the secp256k1 curve.")
@click.pass_context
def write(ctx, **fields):
    """Write PHY configuration. Only the options given are changed."""
    from picoforge.core.rescue import PhyConfigUpdate

    if (fields["vid"] is None) != (fields["pid"] is None):
        raise click.UsageError("--vid and --pid must be given together")
    options = [fields[k] for k in ("led_dimmable", "power_cycle_on_reset", "led_steady")]
    if any(v is not None for v in options) and None in options:
        raise click.UsageError(
            "--led-dimmable, --led-steady and --power-cycle-on-reset must be given together"
        )
    _run(ctx, "write", update=PhyConfigUpdate(**fields))


@picoforge.command("secure-boot")
@click.option("--lock", is_flag=True, help="Also lock the device to the boot key.")
@click.confirmation_option(prompt="Enable secure boot on the connected device?")
@click.pass_context
def secure_boot(ctx, lock):
    """Enable secure boot."""
    _run(ctx, "secure-boot", lock=lock)
