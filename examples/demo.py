#!/usr/bin/env python3
"""
Demo script for the LaTeX to OMML converter
"""

import logging
from pathlib import Path

from latex_omml import ConverterConfig, LaTeXSyntaxError, OMMLConverter

logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

# Equations from a calculus handout
equations = {
    'derivative': r"f'(a) = \lim_{h \to 0} \frac{f(a+h) - f(a)}{h}",
    'fundamental theorem': r"\int_a^b f'(x) \, dx = f(b) - f(a)",
    'power rule': r"\int x^n \, dx = \frac{x^{n+1}}{n+1} + C",
    'matrix product': r"\begin{pmatrix} a & b \\ c & d \end{pmatrix} \begin{pmatrix} x \\ y \end{pmatrix} = \begin{pmatrix} ax + by \\ cx + dy \end{pmatrix}",
    'absolute value': r"|x| = \begin{cases} x & \text{if } x \geq 0 \\ -x & \text{otherwise} \end{cases}",
    'system': r"\begin{aligned} 2x + y &= 5 \\ x - y &= 1 \end{aligned}",
}

converter = OMMLConverter()

print("Converting equations...")
print("=" * 60)

output_dir = Path("demo_output")
output_dir.mkdir(exist_ok=True)

for name, latex in equations.items():
    result = converter.validate(latex)
    xml = converter.convert(latex, display_mode=True)

    print(f"{name}:")
    print(f"   LaTeX: {latex}")
    print(f"   Warnings: {len(result.warnings)}")
    print(f"   OMML: {xml[:70]}...")
    print()

    (output_dir / f"{name.replace(' ', '_')}.xml").write_text(xml, encoding='utf-8')

print(f"OMML files written to: {output_dir}")

# Strict mode rejects broken input instead of repairing it
strict = OMMLConverter(ConverterConfig(strict=True))
try:
    strict.convert(r"\frac{a}{b")
except LaTeXSyntaxError as e:
    print(f"\nStrict mode: {e}")
    for error in e.errors:
        print(f"- {error['type']} at {error['position']}")

print("\nDemo completed!")
