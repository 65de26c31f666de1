"""Demo: rewrite describe/it blocks in module and class context and show the result."""

import logging
import sys

from rewriter.api import rewrite_source
from rewriter.printer import print_tree
from rewriter.validator import validate

SOURCE = """\
module M
  describe "describe" do
    it "adds a method" do
    end
  end
end

class C
  def test_method
  end

  describe "describe" do
    it "adds a method" do
      test_method
    end
  end
end
"""


def main():
    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("SOURCE:")
    print(SOURCE)

    result = rewrite_source(SOURCE)

    print("=" * 60)
    print("REWRITTEN:")
    print("=" * 60)
    print(print_tree(result.tree))

    print("Diagnostics:")
    for diagnostic in result.diagnostics:
        print(f"    {diagnostic}")
    if not result.diagnostics:
        print("    (none)")

    violations = validate(result.tree)
    print(f"\nInvariant violations: {len(violations)}")
    for violation in violations:
        print(f"    {violation}")


if __name__ == "__main__":
    main()
