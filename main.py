from rich.pretty import pprint

from argosy import *


surface = Container(shell=True, fancy=True, colorful=True)
surface.add("Usage: tool [OPTIONS] FILE")
surface.add(group(
    Flag("v", "verbose", descr="Print more."),
    Flag("q", "quiet", descr="Print less."),
    header="Verbosity"
))
surface.add(Option("o", "output", argument="FILE", descr="Write to FILE."))
surface.seal()


if __name__ == '__main__':
    pprint(surface)
    pprint(search_option(surface, partial_name="verb"))
    pprint(search_sticky_option(surface, "oresult.txt"))
