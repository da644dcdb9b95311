import unittest

from clinparse.annotation_store import AnnotationDocument
from clinparse.core.data_structures import (
    InternalNode,
    ParseNode,
    RootNode,
    TerminalNode,
    Token,
    TokenKind,
    TreebankNode,
    iter_nodes,
)
from clinparse.parsing.bracketed import read_bracketed
from clinparse.parsing.linearizer import linearize
from clinparse.parsing.terminals import TerminalNormalizer
from clinparse.parsing.tree_builder import ParseTreeBuilder


def tk(start, end, index):
    return ParseNode(label="TK", start=start, end=end, head_index=index)


def pre(label, start, end, index):
    return ParseNode(label=label, start=start, end=end, head_index=index, children=[tk(start, end, index)])


class TreeBuilderTestCase(unittest.TestCase):
    def prepare(self, text, sentence_begin=0, kinds=None):
        """Токены по словам text (с учётом ведущих пробелов), терминалы и строка парсера."""
        self.document = AnnotationDocument(text, "doc-tree")
        self.builder = ParseTreeBuilder(self.document)
        kinds = kinds or {}

        tokens = []
        position = 0
        for word in text.split(" "):
            if word:
                tokens.append(Token(
                    begin=position, end=position + len(word), text=word,
                    kind=kinds.get(word, TokenKind.WORD),
                ))
            position += len(word) + 1

        terminals = TerminalNormalizer(self.document).normalize(tokens)
        linearized = linearize(terminals, sentence_begin)
        return terminals, linearized


class TestParseTreeBuilder(TreeBuilderTestCase):
    def test_single_token(self):
        terminals, linearized = self.prepare(" " * 100 + "Hello", sentence_begin=100)
        self.assertEqual(linearized.text, "Hello")
        self.assertEqual(linearized.offsets.as_dict(), {0: 0, 5: 5})

        parse = pre("NN", 0, 5, 0)
        result = self.builder.build(100, 105, terminals, linearized.offsets, parse)
        root = result.root

        self.assertTrue(result.ok)
        self.assertEqual(root.node_type, "NN")
        self.assertEqual(root.span, (100, 105))
        self.assertEqual(len(root.children), 1)
        self.assertIs(root.children[0], terminals[0])
        self.assertEqual(terminals[0].index, 0)
        self.assertIs(terminals[0].parent, root)

    def test_nested_leaves(self):
        terminals, linearized = self.prepare(" " * 100 + "The cat", sentence_begin=100)
        self.assertEqual(linearized.offsets.as_dict(), {0: 0, 3: 3, 4: 4, 7: 7})

        parse = ParseNode(label="NP", start=0, end=7, head_index=1, children=[
            ParseNode(label="DT", start=0, end=3, head_index=0),
            ParseNode(label="NN", start=4, end=7, head_index=1),
        ])
        root = self.builder.build(100, 107, terminals, linearized.offsets, parse).root

        self.assertEqual(root.span, (100, 107))
        self.assertEqual([c.span for c in root.children], [(100, 103), (104, 107)])
        self.assertIs(root.children[0], terminals[0])
        self.assertIs(root.children[1], terminals[1])
        self.assertEqual(root.head_index, 1)

    def test_root_is_type_level_fact(self):
        terminals, linearized = self.prepare("Hello")
        root = self.builder.build(0, 5, terminals, linearized.offsets, pre("NN", 0, 5, 0)).root

        self.assertIsInstance(root, RootNode)
        self.assertTrue(root.is_root)
        self.assertFalse(hasattr(root, "parent"))
        self.assertEqual(root.terminals, terminals)

    def test_label_split_into_type_and_tags(self):
        terminals, linearized = self.prepare("He left")
        parse = ParseNode(label="S", start=0, end=7, head_index=1, children=[
            ParseNode(label="NP-SBJ-1", start=0, end=2, head_index=0, children=[pre("PRP", 0, 2, 0)]),
            ParseNode(label="VP", start=3, end=7, head_index=1, children=[pre("VBD", 3, 7, 1)]),
        ])
        root = self.builder.build(0, 7, terminals, linearized.offsets, parse).root
        subject = root.children[0]

        self.assertEqual(subject.node_type, "NP")
        self.assertEqual(subject.node_value, "NP")
        self.assertEqual(subject.node_tags, ["SBJ", "1"])
        self.assertEqual(root.node_tags, [])

    def test_escape_symbol_label_kept_whole(self):
        terminals, linearized = self.prepare(
            "( HTN )", kinds={"(": TokenKind.PUNCTUATION, ")": TokenKind.PUNCTUATION}
        )
        self.assertEqual(linearized.text, "-LRB- HTN -RRB-")
        parse = read_bracketed("(TOP (PRN (-LRB- -LRB-) (NN HTN) (-RRB- -RRB-)))", linearized.text)
        root = self.builder.build(0, 7, terminals, linearized.offsets, parse).root
        prn = root.children[0]

        self.assertEqual([c.node_type for c in prn.children], ["-LRB-", "NN", "-RRB-"])
        self.assertEqual(prn.children[0].node_tags, [])
        self.assertEqual([c.span for c in prn.children], [(0, 1), (2, 5), (6, 7)])

    def test_head_index_passed_through(self):
        terminals, linearized = self.prepare("The cat")
        parse = ParseNode(label="NP", start=0, end=7, head_index=0, children=[
            pre("DT", 0, 3, 0), pre("NN", 4, 7, 1),
        ])
        root = self.builder.build(0, 7, terminals, linearized.offsets, parse).root
        # Вершина берётся из разбора как есть, правила не пересчитываются
        self.assertEqual(root.head_index, 0)
        self.assertEqual(root.children[1].head_index, 1)

    def test_parent_links(self):
        terminals, linearized = self.prepare("The cat")
        parse = ParseNode(label="TOP", start=0, end=7, head_index=1, children=[
            ParseNode(label="NP", start=0, end=7, head_index=1, children=[
                pre("DT", 0, 3, 0), pre("NN", 4, 7, 1),
            ]),
        ])
        root = self.builder.build(0, 7, terminals, linearized.offsets, parse).root
        np = root.children[0]

        self.assertIsInstance(np, InternalNode)
        self.assertIs(np.parent, root)
        self.assertIs(np.children[0].parent, np)
        self.assertIs(terminals[0].parent, np.children[0])
        self.assertFalse(np.leaf)
        self.assertTrue(terminals[1].leaf)


class TestTreeStructure(TreeBuilderTestCase):
    PARSE = "(TOP (S (NP (DT The) (NN patient)) (VP (VBZ denies) (NP (NN chest) (NN pain))) (. .)))"

    def setUp(self):
        terminals, linearized = self.prepare(
            "The patient denies chest pain .", kinds={".": TokenKind.PUNCTUATION}
        )
        self.terminals = terminals
        parse = read_bracketed(self.PARSE, linearized.text)
        self.result = self.builder.build(0, 31, terminals, linearized.offsets, parse, self.PARSE)
        self.root = self.result.root

    def test_span_containment(self):
        for node in iter_nodes(self.root):
            if node.children:
                self.assertEqual(node.begin, node.children[0].begin, node)
                self.assertEqual(node.end, node.children[-1].end, node)

    def test_terminal_identity(self):
        leaves = [n for n in iter_nodes(self.root) if isinstance(n, TerminalNode)]
        self.assertEqual(len(leaves), len(self.terminals))
        for leaf, terminal in zip(leaves, self.terminals):
            self.assertIs(leaf, terminal)

    def test_leaf_flag_matches_children(self):
        for node in iter_nodes(self.root):
            self.assertEqual(node.leaf, not node.children)

    def test_every_node_registered_once(self):
        registered = list(self.document.iterate(TreebankNode))
        nodes = list(iter_nodes(self.root))

        self.assertEqual(len(registered), len({id(n) for n in registered}))
        self.assertEqual({id(n) for n in registered}, {id(n) for n in nodes})
        self.assertEqual(self.document.count(RootNode), 1)

    def test_heads_and_raw_parse(self):
        self.assertEqual(self.root.head_index, 2)  # denies
        self.assertEqual(self.root.children[0].children[0].head_index, 1)  # patient
        self.assertEqual(self.root.treebank_parse, self.PARSE)


class TestAlignmentFailures(TreeBuilderTestCase):
    def test_failed_subtree_skipped_siblings_kept(self):
        terminals, linearized = self.prepare(
            "The \t cat", kinds={"\t": TokenKind.SYMBOL}
        )
        self.assertEqual(linearized.offsets.as_dict(), {0: 0, 3: 3, 4: 6, 7: 9})

        # Средний ребёнок ссылается на позицию выброшенного токена
        bad = pre("X", 8, 9, 1)
        parse = ParseNode(label="NP", start=0, end=7, head_index=2, children=[
            pre("DT", 0, 3, 0), bad, pre("NN", 4, 7, 2),
        ])
        result = self.builder.build(0, 9, terminals, linearized.offsets, parse)
        root = result.root

        self.assertFalse(result.ok)
        self.assertEqual(len(result.failures), 1)
        failure = result.failures[0]
        self.assertIs(failure.parent, root)
        self.assertIs(failure.parse, bad)
        self.assertEqual(failure.child_position, 1)
        self.assertEqual(failure.position, 8)
        self.assertEqual(failure.label, "X")

        self.assertEqual([c.node_type for c in root.children], ["DT", "NN"])
        self.assertEqual([c.span for c in root.children], [(0, 3), (6, 9)])
        self.assertIs(root.children[1].children[0], terminals[2])

    def test_failure_reported_one_level_up(self):
        terminals, linearized = self.prepare("Pain in chest")
        parse = ParseNode(label="TOP", start=0, end=13, head_index=0, children=[
            ParseNode(label="NP", start=0, end=13, head_index=0, children=[
                pre("NN", 0, 4, 0),
                ParseNode(label="PP", start=5, end=12, head_index=1, children=[
                    pre("IN", 5, 7, 1), pre("NN", 8, 13, 2),
                ]),
            ]),
        ])
        result = self.builder.build(0, 13, terminals, linearized.offsets, parse)
        np = result.root.children[0]

        self.assertEqual(len(result.failures), 1)
        self.assertIs(result.failures[0].parent, np)
        self.assertEqual(result.failures[0].label, "PP")
        self.assertEqual([c.node_type for c in np.children], ["NN"])
        self.assertIs(np.parent, result.root)

    def test_leaf_index_out_of_range(self):
        terminals, linearized = self.prepare("Hello")
        parse = ParseNode(label="NN", start=0, end=5, head_index=0, children=[tk(0, 5, 3)])
        result = self.builder.build(0, 5, terminals, linearized.offsets, parse)

        self.assertEqual(len(result.failures), 1)
        self.assertEqual(result.failures[0].position, 3)
        self.assertEqual(result.root.children, [])
        self.assertIsNone(terminals[0].parent)

    def test_root_span_kept_when_every_child_fails(self):
        terminals, linearized = self.prepare("Hello")
        parse = ParseNode(label="TOP", start=0, end=5, head_index=0, children=[pre("NN", 1, 5, 0)])
        result = self.builder.build(0, 5, terminals, linearized.offsets, parse)
        root = result.root

        self.assertEqual(root.span, (0, 5))
        self.assertEqual(root.children, [])
        self.assertTrue(root.leaf)
        self.assertEqual(self.document.count(RootNode), 1)
        # Оборванное поддерево в индекс не попадает
        self.assertEqual(self.document.count(InternalNode), 0)


if __name__ == '__main__':
    unittest.main()
