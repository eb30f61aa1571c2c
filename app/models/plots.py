from enum import IntEnum

from pydantic import BaseModel, Field, computed_field


class ProofSize(IntEnum):
    """Plot k-size."""

    K32 = 32
    K33 = 33
    K34 = 34

    @property
    def label(self) -> str:
        return f"k={self.value}"


class CompressionLevel(IntEnum):
    """Plot compression level. There is no level 8."""

    C0 = 0
    C1 = 1
    C2 = 2
    C3 = 3
    C4 = 4
    C5 = 5
    C6 = 6
    C7 = 7
    C9 = 9

    @property
    def label(self) -> str:
        return f"C{self.value}"


BYTES_PER_GIB = 1024**3

# Plot sizes in GiB (https://docs.chia.net/chia-blockchain/resources/k-sizes/)
PLOT_SIZE_TABLE: dict[ProofSize, dict[CompressionLevel, float]] = {
    ProofSize.K32: {
        CompressionLevel.C0: 101.4,
        CompressionLevel.C1: 87.5,
        CompressionLevel.C2: 86.0,
        CompressionLevel.C3: 84.5,
        CompressionLevel.C4: 82.9,
        CompressionLevel.C5: 81.3,
        CompressionLevel.C6: 79.6,
        CompressionLevel.C7: 78.0,
        CompressionLevel.C9: 75.2,
    },
    ProofSize.K33: {
        CompressionLevel.C0: 208.8,
        CompressionLevel.C1: 179.6,
        CompressionLevel.C2: 176.6,
        CompressionLevel.C3: 173.4,
        CompressionLevel.C4: 170.2,
        CompressionLevel.C5: 167.0,
        CompressionLevel.C6: 163.8,
        CompressionLevel.C7: 160.6,
        CompressionLevel.C9: 154.1,
    },
    ProofSize.K34: {
        CompressionLevel.C0: 429.9,
        CompressionLevel.C1: 368.2,
        CompressionLevel.C2: 362.1,
        CompressionLevel.C3: 355.9,
        CompressionLevel.C4: 349.4,
        CompressionLevel.C5: 343.0,
        CompressionLevel.C6: 336.6,
        CompressionLevel.C7: 330.2,
        CompressionLevel.C9: 315.5,
    },
}

# Uncompressed k32
DEFAULT_PLOT_SIZE_GIB = PLOT_SIZE_TABLE[ProofSize.K32][CompressionLevel.C0]


def plot_size_gib(proof_size: int, compression_level: int) -> float:
    """
    Look up the on-disk size of a single plot.

    Args:
        proof_size: Plot k-size
        compression_level: Plot compression level

    Returns:
        Plot size in GiB, or the uncompressed k32 size for an unlisted pair
    """
    return PLOT_SIZE_TABLE.get(proof_size, {}).get(compression_level, DEFAULT_PLOT_SIZE_GIB)


def plot_size_bytes(proof_size: int, compression_level: int) -> float:
    """Size of a single plot in bytes."""
    return plot_size_gib(proof_size, compression_level) * BYTES_PER_GIB


class PlotSize(BaseModel):
    """On-disk footprint of one plot format."""

    proof_size: ProofSize = Field(..., description="Plot k-size")
    compression_level: CompressionLevel = Field(..., description="Compression level")
    size_gib: float = Field(..., gt=0, description="Plot size in GiB")

    @computed_field
    @property
    def label(self) -> str:
        """Display label, e.g. "k=32 C5"."""
        return f"{self.proof_size.label} {self.compression_level.label}"

    @computed_field
    @property
    def size_bytes(self) -> float:
        """Plot size in bytes."""
        return self.size_gib * BYTES_PER_GIB


# Plot format library, one entry per supported pair
PLOT_SIZE_LIBRARY: list[PlotSize] = [
    PlotSize(proof_size=proof_size, compression_level=level, size_gib=size_gib)
    for proof_size, sizes in PLOT_SIZE_TABLE.items()
    for level, size_gib in sizes.items()
]
