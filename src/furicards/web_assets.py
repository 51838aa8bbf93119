from __future__ import annotations

FAVICON_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 64 64" role="img" aria-label="振 icon">
  <rect width="64" height="64" rx="14" ry="14" fill="#1b1f32" />
  <text x="32" y="44" text-anchor="middle" font-family="'Hiragino Sans', 'Noto Sans JP', sans-serif"
        font-size="36" font-weight="700" fill="#f5f5f5">振</text>
  <text x="52" y="20" text-anchor="middle" font-family="'Hiragino Sans', 'Noto Sans JP', sans-serif"
        font-size="12" fill="#9aa0b5">ふ</text>
</svg>"""


__all__ = ["FAVICON_SVG"]
