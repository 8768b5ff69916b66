import sys
import random

from vtree.core.storage import save_tree_file

PHRASES = [
    "The early bird catches the worm.",
    "A journey of a thousand miles begins with a single step.",
    "The pen is mightier than the sword.",
    "Actions speak louder than words.",
    "Better late than never.",
    "Every cloud has a silver lining.",
    "Fortune favors the bold.",
    "Knowledge is power.",
    "Practice makes perfect.",
    "Rome wasn't built in a day.",
    "All that glitters is not gold.",
    "Great minds think alike.",
]

def make_node(rng, text):
    return {"id": f"{rng.getrandbits(48):012x}", "name": text, "open": False, "children": []}

def build_tree(count, seed=None):
    """Grow `count` nodes by attaching each new node under a random existing one."""
    rng = random.Random(seed)
    roots = [make_node(rng, rng.choice(PHRASES))]
    nodes = list(roots)

    for i in range(count - 1):
        node = make_node(rng, rng.choice(PHRASES))
        # Occasionally start a new top-level node.
        if rng.random() < 0.05:
            roots.append(node)
        else:
            rng.choice(nodes)["children"].append(node)
        nodes.append(node)
        if (i + 2) % 1000 == 0:
            print(f"Created {i + 2} nodes...")

    return roots

def main():
    if len(sys.argv) not in (3, 4):
        print(f"Usage: {sys.argv[0]} /path/to/tree.json N [SEED]")
        sys.exit(1)

    path = sys.argv[1]
    count = int(sys.argv[2])
    seed = int(sys.argv[3]) if len(sys.argv) == 4 else None
    if count < 1:
        print("Error: N must be at least 1")
        sys.exit(1)

    save_tree_file(path, build_tree(count, seed))
    print(f"Wrote {count} nodes to {path}")

if __name__ == '__main__':
    main()
