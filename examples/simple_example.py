#!/usr/bin/env python3
"""Simple example of using the LaTeX to OMML converter"""

from latex_omml import latex_to_omml_inline, latex_to_omml_paragraph

# Inline equation
print("Inline:")
print(latex_to_omml_inline(r"E = mc^2"))

# Display equation, centred in its own paragraph
print("\nDisplay:")
print(latex_to_omml_paragraph(r"x = \frac{-b \pm \sqrt{b^2 - 4ac}}{2a}"))
