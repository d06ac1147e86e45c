import os

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "fixtures")
FIXTURES_INPUT_DIR = os.path.join(FIXTURES_DIR, "input")

THREE_SPECIMENS_PHYLIP_FP = os.path.join(FIXTURES_INPUT_DIR, "three_specimens.phy")
THREE_SPECIMENS_TABLE_FP = os.path.join(FIXTURES_INPUT_DIR, "three_specimens.spc.txt")
BINARY_PHYLIP_FP = os.path.join(FIXTURES_INPUT_DIR, "binary.phy")
BINARY_TABLE_FP = os.path.join(FIXTURES_INPUT_DIR, "binary.spc.txt")
GENOTYPES_VCF_FP = os.path.join(FIXTURES_INPUT_DIR, "genotypes.vcf")
GENOTYPES_VCF_GZ_FP = os.path.join(FIXTURES_INPUT_DIR, "genotypes.vcf.gz")
GENOTYPES_TABLE_FP = os.path.join(FIXTURES_INPUT_DIR, "genotypes.spc.txt")
BAD_ALPHABET_PHYLIP_FP = os.path.join(FIXTURES_INPUT_DIR, "bad_alphabet.phy")
UNEQUAL_LENGTHS_PHYLIP_FP = os.path.join(FIXTURES_INPUT_DIR, "unequal_lengths.phy")
MISMATCHED_TABLE_FP = os.path.join(FIXTURES_INPUT_DIR, "mismatched.spc.txt")

# Binary fixture: columns 0, 2, 3, and 5 are retained
BINARY_EXPECTED_SEQUENCES = ["0200", "0210", "2002", "2020"]

# VCF fixture, recoded with the first base (alphabetically) of each site as "0"
GENOTYPES_EXPECTED_SEQUENCES = ["011", "1-0", "202", "-22"]


class FixedPolarityRng:

    """Stand-in for np.random.Generator with a constant `integers` draw."""

    def __init__(self, value=0):
        self.value = value

    def integers(self, high):
        return self.value


def write_lines(tmpdir, filename, lines):
    path = tmpdir.join(filename)
    path.write("".join(f"{line}\n" for line in lines))
    return str(path)
