"""MIDI command implementations."""

import click

from launchemu.midi import list_ports


@click.group(name="midi")
def midi_group():
    """MIDI port commands."""
    pass


@midi_group.command(name="list")
def list_midi():
    """List available MIDI ports."""
    inputs, outputs = list_ports()

    click.echo("MIDI Input Ports:\n")
    if not inputs:
        click.echo("  No MIDI input ports found.")
    else:
        for i, port in enumerate(inputs):
            click.echo(f"  [{i}] {port}")

    click.echo("\nMIDI Output Ports:\n")
    if not outputs:
        click.echo("  No MIDI output ports found.")
    else:
        for i, port in enumerate(outputs):
            click.echo(f"  [{i}] {port}")
