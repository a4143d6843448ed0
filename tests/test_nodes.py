"""
Tests for savings_bonds.nodes.
"""

from savings_bonds.nodes import Node, element, find_by_class, find_by_tag, parse_html


class TestFirstChild:
    def test_skips_whitespace_before_element(self):
        cell = element("td", "\n   ", element("strong", "$1.00"))
        assert cell.first_child.tag == "strong"

    def test_text_child(self):
        cell = element("td", "  EE  ")
        assert cell.first_child.is_text
        assert cell.first_child.text == "  EE  "

    def test_whitespace_only_cell_yields_whitespace(self):
        cell = element("td", "\xa0")
        assert cell.first_child is not None
        assert cell.first_child.text.strip() == ""

    def test_empty_node(self):
        assert element("td").first_child is None


class TestSearch:
    def test_find_by_class_document_order(self):
        root = element(
            "div",
            element("p", "one", classes=("hit",)),
            element("div", element("span", "two", classes=("other", "hit"))),
            element("p", "three", classes=("hit",)),
        )
        found = find_by_class(root, "hit")
        assert [n.get_text() for n in found] == ["one", "two", "three"]

    def test_find_by_class_excludes_root(self):
        root = element("table", element("tr", classes=("row",)), classes=("row",))
        assert len(find_by_class(root, "row")) == 1

    def test_find_by_tag_nested(self):
        root = element("tr", element("td", "a"), element("td", element("td", "b")))
        assert len(find_by_tag(root, "td")) == 3

    def test_text_nodes_never_match(self):
        root = Node(tag="div", children=[Node(text="td")])
        assert find_by_tag(root, "td") == []


class TestParseHtml:
    def test_classes_and_text(self):
        doc = parse_html('<div class="bnddata wide"><span>Hi</span></div>')
        (div,) = find_by_class(doc, "bnddata")
        assert div.classes == ("bnddata", "wide")
        assert div.get_text() == "Hi"

    def test_drops_script_and_comments(self):
        doc = parse_html(
            "<body><!-- <p class='x'>c</p> -->"
            "<script>document.write('<p class=\"x\">s</p>')</script>"
            "<p class='x'>real</p></body>"
        )
        found = find_by_class(doc, "x")
        assert [n.get_text() for n in found] == ["real"]

    def test_entities_decoded(self):
        doc = parse_html("<table><tr><td>&nbsp;</td></tr></table>")
        (td,) = find_by_tag(doc, "td")
        assert td.get_text() == "\xa0"
