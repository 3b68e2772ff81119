"""
Command-line interface for MARAL.

Provides the `maral` command for inspecting molecular documents.
"""

import logging
import sys

import click

from maral import __version__


@click.command()
@click.argument("pdb_file", type=click.Path(exists=True))
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("-c", "--connect", "do_connect", is_flag=True, help="Infer bonds from proximity")
@click.option(
    "-t", "--tolerance", type=float, default=0.45, help="Bond tolerance (A)"
)
@click.option("-j", "--workers", type=int, default=1, help="Threads used by --connect")
@click.option(
    "--single-frame",
    is_flag=True,
    help="Read every MODEL as its own subtree instead of as frames",
)
@click.option("--tree", is_flag=True, help="Dump the document tree")
@click.option("-f", "--frame", type=int, default=0, help="Frame used by --tree")
@click.option("-O", "--output", type=click.Path(), help="Output file for --tree")
@click.option("--version", is_flag=True, help="Show version and exit")
def main(
    pdb_file,
    verbose,
    do_connect,
    tolerance,
    workers,
    single_frame,
    tree,
    frame,
    output,
    version,
):
    """
    MARAL: hierarchical molecular document model

    Reads a PDB file into a root/model/chain/residue/atom tree, optionally
    infers bonds from covalent radii, and reports what it found.

    Example usage:

        maral input.pdb

        maral -c -j 4 trajectory.pdb

        maral --tree -O tree.txt input.pdb
    """
    if version:
        click.echo(f"MARAL version {__version__}")
        return

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        click.echo(f"MARAL v{__version__}")
        click.echo(f"Input: {pdb_file}")
        click.echo()

    try:
        from maral.algorithms import connect
        from maral.core import Kind
        from maral.io import format_tree, read_pdb, write_tree

        with read_pdb(pdb_file, multiframe=not single_frame) as root:
            bonds = 0
            if do_connect:
                for model in root.range(Kind.MODEL):
                    bonds += connect(
                        model.range(Kind.ATOM), tolerance=tolerance, workers=workers
                    )

            click.echo(f"Models:   {sum(1 for _ in root.range(Kind.MODEL))}")
            click.echo(f"Chains:   {sum(1 for _ in root.range(Kind.CHAIN))}")
            click.echo(f"Residues: {sum(1 for _ in root.range(Kind.RESIDUE))}")
            click.echo(f"Atoms:    {root.natoms}")
            click.echo(f"Frames:   {root.frames_size()}")
            if do_connect:
                click.echo(f"Bonds:    {bonds}")

            if tree:
                if output:
                    write_tree(output, root, frame)
                    if verbose:
                        click.echo(f"Tree written to {output}")
                else:
                    click.echo(format_tree(root, frame), nl=False)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
