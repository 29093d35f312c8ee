"""
Office Math Markup Language element tree.

Generators build a tree of :class:`OMMLElement` nodes bottom-up; the tree is
turned into lxml elements and serialised once at the end.
"""

import regex
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import lxml.etree as ET


MATH_NS = "http://schemas.openxmlformats.org/officeDocument/2006/math"
NSMAP = {'m': MATH_NS}
XML_SPACE = '{http://www.w3.org/XML/1998/namespace}space'

# Characters lxml refuses to serialise, including lone surrogates
_XML_INVALID_CHARS = regex.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')


def m_tag(name: str) -> str:
    """Qualified name in the math namespace."""
    return f"{{{MATH_NS}}}{name}"


def sanitize_text(text: str) -> str:
    return _XML_INVALID_CHARS.sub('', text)


@dataclass
class OMMLElement:
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List['OMMLElement'] = field(default_factory=list)

    def to_element(self, parent: Optional[ET._Element] = None) -> ET._Element:
        """Convert to an lxml element, attached to ``parent`` when given."""
        if parent is None:
            elem = ET.Element(m_tag(self.tag), nsmap=NSMAP)
        else:
            elem = ET.SubElement(parent, m_tag(self.tag))

        for name, value in self.attributes.items():
            elem.set(m_tag(name), sanitize_text(value))

        if self.text is not None:
            elem.text = sanitize_text(self.text)
            if self.text != self.text.strip():
                elem.set(XML_SPACE, 'preserve')

        for child in self.children:
            child.to_element(elem)

        return elem

    def to_xml(self) -> str:
        return ET.tostring(self.to_element(), encoding='unicode')

    def find(self, tag: str) -> Optional['OMMLElement']:
        """First direct child with the given tag."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def iter_text(self):
        if self.text:
            yield self.text
        for child in self.children:
            yield from child.iter_text()


def _val(tag: str, value: str) -> OMMLElement:
    return OMMLElement(tag, attributes={'val': value})


def _ctrl() -> OMMLElement:
    return OMMLElement('ctrlPr')


def _slot(tag: str, content: Sequence[OMMLElement]) -> OMMLElement:
    return OMMLElement(tag, children=list(content))


def run(text: str, upright: bool = False, script: Optional[str] = None,
        align: bool = False) -> OMMLElement:
    """A math run ``m:r``.

    Args:
        text: Run text, escaped on serialisation
        upright: Plain (non-italic) style, used for function names and text
        script: Font script such as ``double-struck``
        align: Mark the run as the alignment point of an equation array
    """
    properties = []
    if script:
        properties.append(_val('scr', script))
    if upright:
        properties.append(_val('sty', 'p'))
    if align:
        properties.append(OMMLElement('aln'))

    children = []
    if properties:
        children.append(OMMLElement('rPr', children=properties))
    children.append(OMMLElement('t', text=text))
    return OMMLElement('r', children=children)


def fraction(numerator: Sequence[OMMLElement],
             denominator: Sequence[OMMLElement]) -> OMMLElement:
    return OMMLElement('f', children=[
        OMMLElement('fPr', children=[_ctrl()]),
        _slot('num', numerator),
        _slot('den', denominator),
    ])


def radical(body: Sequence[OMMLElement],
            degree: Optional[Sequence[OMMLElement]] = None) -> OMMLElement:
    """Root ``m:rad``; without a degree the degree slot is hidden."""
    properties = []
    if not degree:
        properties.append(_val('degHide', '1'))
    properties.append(_ctrl())
    return OMMLElement('rad', children=[
        OMMLElement('radPr', children=properties),
        _slot('deg', degree or []),
        _slot('e', body),
    ])


def nary(char: str, sub: Sequence[OMMLElement], sup: Sequence[OMMLElement],
         body: Sequence[OMMLElement], has_sub: bool, has_sup: bool,
         stacked: bool = True) -> OMMLElement:
    """Large operator ``m:nary``.

    With no limits both limit slots are hidden; otherwise only the missing
    one is. ``stacked`` places the limits above and below the glyph.
    """
    properties = [_val('chr', char)]
    if not has_sub and not has_sup:
        properties.append(_val('limLoc', 'undOvr'))
    else:
        properties.append(_val('limLoc', 'undOvr' if stacked else 'subSup'))
    if not has_sub:
        properties.append(_val('subHide', '1'))
    if not has_sup:
        properties.append(_val('supHide', '1'))
    properties.append(_ctrl())

    return OMMLElement('nary', children=[
        OMMLElement('naryPr', children=properties),
        _slot('sub', sub),
        _slot('sup', sup),
        _slot('e', body),
    ])


def accent(char: str, body: Sequence[OMMLElement]) -> OMMLElement:
    return OMMLElement('acc', children=[
        OMMLElement('accPr', children=[_val('chr', char), _ctrl()]),
        _slot('e', body),
    ])


def delimiter(begin: str, end: str, body: Sequence[OMMLElement]) -> OMMLElement:
    """Stretching delimiter ``m:d``; an empty character is invisible."""
    return OMMLElement('d', children=[
        OMMLElement('dPr', children=[_val('begChr', begin), _val('endChr', end), _ctrl()]),
        _slot('e', body),
    ])


def script(base: Sequence[OMMLElement], sub: Optional[Sequence[OMMLElement]] = None,
           sup: Optional[Sequence[OMMLElement]] = None) -> OMMLElement:
    """Combine a base with a subscript and/or superscript into one node.

    ``None`` means the script is absent; an empty sequence is a present but
    empty script.
    """
    if sub is not None and sup is not None:
        return OMMLElement('sSubSup', children=[
            OMMLElement('sSubSupPr', children=[_ctrl()]),
            _slot('e', base),
            _slot('sub', sub),
            _slot('sup', sup),
        ])
    if sub is not None:
        return OMMLElement('sSub', children=[
            OMMLElement('sSubPr', children=[_ctrl()]),
            _slot('e', base),
            _slot('sub', sub),
        ])
    return OMMLElement('sSup', children=[
        OMMLElement('sSupPr', children=[_ctrl()]),
        _slot('e', base),
        _slot('sup', sup or []),
    ])


def matrix(rows: Sequence[Sequence[Sequence[OMMLElement]]],
           justifications: Sequence[str]) -> OMMLElement:
    """Matrix ``m:m``; one column group per entry of ``justifications``.

    Rows must already be padded to ``len(justifications)`` cells.
    """
    columns = []
    for justification, count in _group_columns(justifications):
        columns.append(OMMLElement('mc', children=[
            OMMLElement('mcPr', children=[
                _val('count', str(count)),
                _val('mcJc', justification),
            ]),
        ]))

    children = [OMMLElement('mPr', children=[OMMLElement('mcs', children=columns), _ctrl()])]
    for row in rows:
        children.append(OMMLElement('mr', children=[_slot('e', cell) for cell in row]))
    return OMMLElement('m', children=children)


def _group_columns(justifications: Sequence[str]):
    """Collapse adjacent columns with equal justification into counted groups."""
    groups = []
    for justification in justifications:
        if groups and groups[-1][0] == justification:
            groups[-1][1] += 1
        else:
            groups.append([justification, 1])
    return [tuple(group) for group in groups]


def equation_array(rows: Sequence[Sequence[OMMLElement]]) -> OMMLElement:
    children = [OMMLElement('eqArrPr', children=[_ctrl()])]
    children.extend(_slot('e', row) for row in rows)
    return OMMLElement('eqArr', children=children)


def math(content: Sequence[OMMLElement]) -> OMMLElement:
    return _slot('oMath', content)


def math_paragraph(content: Sequence[OMMLElement], justification: str = 'center') -> OMMLElement:
    return OMMLElement('oMathPara', children=[
        OMMLElement('oMathParaPr', children=[_val('jc', justification)]),
        math(content),
    ])


def serialize_fragment(elements: Sequence[OMMLElement]) -> str:
    """Serialise sibling elements without a wrapping element.

    The result carries ``m:`` prefixes but no namespace declaration, ready to
    be placed inside a parent that already declares the math namespace.
    """
    if not elements:
        return ''
    container = math(elements).to_xml()
    start = container.index('>') + 1
    end = container.rindex('</')
    return container[start:end]


__all__ = [
    'MATH_NS',
    'NSMAP',
    'OMMLElement',
    'm_tag',
    'sanitize_text',
    'run',
    'fraction',
    'radical',
    'nary',
    'accent',
    'delimiter',
    'script',
    'matrix',
    'equation_array',
    'math',
    'math_paragraph',
    'serialize_fragment',
]
