from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Optional

from .codec import HuffmanCoder
from .errors import HuffmanError
from .plots import plot_hist_bits, plot_code_lengths
from .report import (
    code_table_frame,
    save_code_table_csv,
    save_metrics_csv,
    summary_row,
    write_markdown,
)


@dataclass
class RunParams:
    text: str
    out_dir: Optional[str] = None
    encoding: str = "utf-8"
    show_bits: bool = False
    show_text: bool = False
    figures: bool = True


def ensure_dirs(out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    figdir = os.path.join(out_dir, "figures")
    os.makedirs(figdir, exist_ok=True)
    return figdir


def read_text(path: str, encoding: str = "utf-8") -> str:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Texto no existe: {path}")
    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


def process_text(params: RunParams):
    # 1) Leer texto completo en memoria
    raw_text = read_text(params.text, params.encoding)

    # 2) Frecuencias -> árbol -> tabla de códigos
    coder = HuffmanCoder.from_text(raw_text)

    # 3) Codificación
    encoded = coder.encode(raw_text)
    if params.show_bits:
        print(encoded.to_str())
    print(f"encoded length {len(encoded.to_bytes())} bytes ({len(encoded)} bits)")
    print(f"raw str length {len(raw_text.encode('utf-8'))} bytes ({len(raw_text)} symbols)")
    print(f"average code length {coder.average_length():.4f} bits/symbol")

    # 4) Decodificación y verificación
    decoded = coder.decode(encoded)
    if params.show_text:
        print(decoded)
        print(raw_text)
    if decoded != raw_text:
        raise HuffmanError("el texto decodificado no coincide con el original")
    print("round trip OK")

    return raw_text, coder, encoded


def write_outputs(params: RunParams, raw_text: str, coder: HuffmanCoder, encoded):
    figdir = ensure_dirs(params.out_dir)
    name = os.path.basename(params.text)

    table = code_table_frame(coder.counts, coder.code)
    save_code_table_csv(params.out_dir, table)
    metrics = save_metrics_csv(params.out_dir, [summary_row(name, raw_text, coder, encoded)])

    if params.figures:
        plot_code_lengths(coder.code, coder.counts, f"{name}: longitudes de código",
                          os.path.join(figdir, "code_lengths.png"))
        plot_hist_bits(encoded, f"{name}: histograma de bits (Huffman)",
                       os.path.join(figdir, "bits_hist.png"))

    write_markdown(params.out_dir, metrics, table, figures=params.figures)


def parse_args(argv=None) -> RunParams:
    ap = argparse.ArgumentParser(description="Compresión de texto con código de Huffman")
    ap.add_argument("--text", required=True, help="Ruta a archivo de texto")
    ap.add_argument("--out", default=None, help="Directorio de salida (CSV, informe y figuras)")
    ap.add_argument("--encoding", default="utf-8", help="Codificación del archivo de texto")
    ap.add_argument("--show-bits", action="store_true", help="Imprime el flujo de bits codificado")
    ap.add_argument("--show-text", action="store_true", help="Imprime el texto decodificado y el original")
    ap.add_argument("--no-figures", action="store_true", help="No genera figuras")
    args = ap.parse_args(argv)
    return RunParams(
        text=args.text,
        out_dir=args.out,
        encoding=args.encoding,
        show_bits=args.show_bits,
        show_text=args.show_text,
        figures=not args.no_figures,
    )


def main(argv=None) -> int:
    params = parse_args(argv)
    try:
        raw_text, coder, encoded = process_text(params)
        if params.out_dir:
            write_outputs(params, raw_text, coder, encoded)
            print(f"Listo. Salidas en: {params.out_dir}")
    except (HuffmanError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
