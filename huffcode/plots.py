import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .bits_utils import bits_entropy_stats


def plot_hist_bits(bits, title, fname):
    """
    Histograma de los bits codificados (conteo de 0/1).
    El título incluye P(1) y la entropía por bit del flujo; cada barra lleva
    su conteo. Devuelve (p1, H).
    """
    bits = list(bits)
    _, p1, H, _ = bits_entropy_stats(bits)
    arr = np.array(bits, dtype=np.uint8)
    counts = [int(np.sum(arr == 0)), int(np.sum(arr == 1))]
    plt.figure()
    bars = plt.bar([0, 1], counts)
    for bar, c in zip(bars, counts):
        plt.annotate(str(c), (bar.get_x() + bar.get_width() / 2, c), ha='center', va='bottom')
    plt.xticks([0, 1], ['0', '1'])
    plt.xlabel('Bit')
    plt.ylabel('Frecuencia')
    plt.title(f"{title}\nn={len(bits)}  P(1)={p1:.3f}  H={H:.3f} bits/bit")
    plt.tight_layout()
    plt.savefig(fname, dpi=140)
    plt.close()
    return p1, H


def plot_code_lengths(code, counts, title, fname):
    """Número de apariciones en el texto agrupadas por longitud de código."""
    lengths = np.array([len(code[s]) for s in counts], dtype=int)
    weights = np.array([counts[s] for s in counts], dtype=float)
    xs = np.arange(1, lengths.max() + 1)
    totals = [weights[lengths == L].sum() for L in xs]
    plt.figure()
    plt.bar(xs, totals)
    plt.xticks(xs)
    plt.xlabel('Longitud de código [bits]')
    plt.ylabel('Apariciones')
    plt.title(title)
    plt.tight_layout()
    plt.savefig(fname, dpi=140)
    plt.close()
