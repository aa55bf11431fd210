# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""
Conversion of EC2 Query API response documents into plain Python data.

A response becomes nested C{dict}s, C{list}s and strings.  The root
element is dropped, so the result of parsing::

    <DescribeRegionsResponse>
      <requestId>abc</requestId>
      <regionInfo>
        <item><regionName>us-east-1</regionName></item>
      </regionInfo>
    </DescribeRegionsResponse>

is::

    {"requestId": "abc",
     "regionInfo": {"item": [{"regionName": "us-east-1"}]}}

Elements named C{item} or C{Errors} are always lists so that callers can
iterate over them without checking how many there were.
"""

from txec2.util import XML


__all__ = ["FORCE_LIST", "parse_response", "element_to_tree"]


FORCE_LIST = frozenset(["item", "Errors"])


def _has_text(text):
    return text is not None and text.strip() != ""


def element_to_tree(element, force_list=FORCE_LIST):
    """
    Convert one element (without its own tag) to a tree value.

    A leaf element is its text, or C{None} when empty or only whitespace.
    Anything with
    attributes or children is a C{dict}; repeated children and children
    named in C{force_list} are collected into lists.  Text mixed in with
    children or attributes is kept under C{"content"}.
    """
    children = list(element)
    if not children and not element.attrib:
        if not _has_text(element.text):
            return None
        return element.text

    result = dict(element.attrib)
    for child in children:
        value = element_to_tree(child, force_list)
        if child.tag in result:
            existing = result[child.tag]
            if child.tag in force_list or isinstance(existing, list):
                existing.append(value)
            else:
                result[child.tag] = [existing, value]
        elif child.tag in force_list:
            result[child.tag] = [value]
        else:
            result[child.tag] = value
    if _has_text(element.text):
        result["content"] = element.text.strip()
    return result


def parse_response(xml_bytes, force_list=FORCE_LIST):
    """
    Parse an EC2 response body into a tree.

    @param xml_bytes: The raw response body.
    @return: The converted content of the document's root element.  A
        document whose root is empty gives an empty C{dict}.
    @raise xml.etree.ElementTree.ParseError: If the body is not XML.
    """
    root = XML(xml_bytes)
    tree = element_to_tree(root, force_list)
    if tree is None:
        return {}
    if not isinstance(tree, dict):
        return {"content": tree}
    return tree
