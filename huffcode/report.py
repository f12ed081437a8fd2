import os
import math
import pandas as pd

from .bits_utils import bits_entropy_stats

METRIC_COLUMNS = [
    "Caso",
    "Símbolos",
    "Símbolos distintos",
    "Bytes originales (UTF-8)",
    "Bits originales",
    "Bits codificados",
    "Bytes codificados",
    "Razón de compresión",
    "Longitud media [bits/símbolo]",
    "Entropía fuente [bits/símbolo]",
    "Eficiencia",
    "P(1) salida",
]


def _display(sym) -> str:
    # Caracteres de control visibles en la tabla
    if isinstance(sym, str) and (not sym.isprintable() or sym.isspace()):
        return repr(sym)
    return str(sym)


def source_entropy(counts) -> float:
    """Entropía de Shannon de la distribución de símbolos (bits/símbolo)."""
    total = sum(counts.values())
    if total <= 0:
        return 0.0
    H = 0.0
    for f in counts.values():
        p = f / total
        H -= p * math.log2(p)
    return H


def code_table_frame(counts, code) -> pd.DataFrame:
    """Tabla de códigos ordenada por frecuencia descendente."""
    total = sum(counts.values())
    rows = [
        (s, _display(s), f, f / total, code[s], len(code[s]))
        for s, f in counts.items()
    ]
    df = pd.DataFrame(rows, columns=["symbol", "display", "frequency", "probability", "code", "length"])
    return df.sort_values(["frequency", "length"], ascending=[False, True], kind="stable").reset_index(drop=True)


def summary_row(name: str, text: str, coder, bits):
    """Una fila de métricas para save_metrics_csv."""
    raw_bytes = len(text.encode("utf-8"))
    n_bits = len(bits)
    enc_bytes = (n_bits + 7) // 8
    Lavg = coder.average_length()
    H = source_entropy(coder.counts)
    _, p1, _, _ = bits_entropy_stats(bits)
    return (
        name,
        len(text),
        len(coder.counts),
        raw_bytes,
        raw_bytes * 8,
        n_bits,
        enc_bytes,
        raw_bytes / enc_bytes if enc_bytes else float("nan"),
        Lavg,
        H,
        H / Lavg if Lavg else float("nan"),
        p1,
    )


def save_metrics_csv(out_dir: str, rows):
    df = pd.DataFrame(rows, columns=METRIC_COLUMNS)
    df.to_csv(os.path.join(out_dir, "metrics.csv"), index=False)
    return df


def save_code_table_csv(out_dir: str, table: pd.DataFrame):
    table.to_csv(os.path.join(out_dir, "code_table.csv"), index=False)


def write_markdown(out_dir: str, metrics: pd.DataFrame, table: pd.DataFrame, figures: bool = True):
    m = metrics.iloc[0]
    md = f"""# Codificación Huffman – {m['Caso']}

## 1) Resumen
- Símbolos: {m['Símbolos']} ({m['Símbolos distintos']} distintos)
- Tamaño original: {m['Bytes originales (UTF-8)']} bytes ({m['Bits originales']} bits)
- Tamaño codificado: {m['Bytes codificados']} bytes ({m['Bits codificados']} bits)
- Razón de compresión: {m['Razón de compresión']:.3f}
- Longitud media: {m['Longitud media [bits/símbolo]']:.4f} bits/símbolo
- Entropía de la fuente: {m['Entropía fuente [bits/símbolo]']:.4f} bits/símbolo
- Eficiencia: {m['Eficiencia']:.4f}

## 2) Tabla de códigos
Ver **code_table.csv** ({len(table)} símbolos, código más largo: {table['length'].max()} bits).
"""
    if figures:
        md += """
## 3) Figuras
- Longitudes de código: ![code_lengths](figures/code_lengths.png)
- Bits de salida: ![bits_hist](figures/bits_hist.png)
"""
    with open(os.path.join(out_dir, "report.md"), "w", encoding="utf-8") as f:
        f.write(md)
