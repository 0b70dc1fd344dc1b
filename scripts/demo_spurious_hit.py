"""Demo: compare how Naive, KMP and Rabin-Karp walk the same input.

"C;" and "AB" hash to the same value modulo 101, so Rabin-Karp hits a
spurious match at offset 0 before confirming the real one at offset 2.
"""

from matchtrace.api import describe_algorithm, dump_trace, generate_trace
from matchtrace.trace_types import Algorithm

TEXT = "C;ABXXAB"
PATTERN = "AB"


def main():
    for algorithm in Algorithm:
        print("=" * 60)
        print(describe_algorithm(algorithm))
        print("=" * 60)
        trace = generate_trace(TEXT, PATTERN, algorithm)
        print(dump_trace(trace))
        print()


if __name__ == "__main__":
    main()
