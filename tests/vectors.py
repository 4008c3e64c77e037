"""Reference settings and texts shared by the test modules."""

# Enigma Instruction Manual, 1930 (wheels II I III, Ringstellung XMV, Grundstellung ABL)
MANUAL_SETTINGS = dict(
    rotors="213",
    ring_settings="XMV",
    start_positions="ABL",
    reflector="A",
    plugboard="AM,FI,NV,PS,TU,WZ",
)
MANUAL_FLAGS = ["-r", "213", "-rs", "XMV", "-sp", "ABL", "-rf", "A", "-s", "AM,FI,NV,PS,TU,WZ"]
MANUAL_CIPHERTEXT = (
    "GCDSEAHUGWTQGRKVLFGXUCALXVYMIGMMNMFDXTGNVHVRMMEVOUYFZSLRHDRRXFJWCFHUHMUNZEFRDISIKBGPMYVXUZ"
)
# plaintext printed in the manual
MANUAL_PLAINTEXT = (
    "FEINDLIQEINFANTERIEKOLONNEBEOBAQTETXANFANGSUEDAUSGANGBAERWALDEXENDEDREIKMOSTWAERTSNEUSTADT"
)
# what the sequential stepping rule produces: three letters differ, at the
# keystrokes where the right wheel passes its notch
SEQUENTIAL_PLAINTEXT = (
    "FEINDLIQEGNFANTERIEKOLONNEBEOBAQTETJANFANGSUEDAUSGANGBAERWALDEXENDEDREIKMOSTWAERTSNEUSTWDT"
)
SHIFT_BY_ONE = "BCDEFGHIJKLMNOPQRSTUVWXYZA"


def in_blocks(text, size=5):
    return " ".join(text[i:i + size] for i in range(0, len(text), size))
