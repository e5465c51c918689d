import sys

from ireal_parser import parse, to_harte

text = "{*AT44C^7XyQ|A-7XyQ|D-7 G7|Kcl  }"
music = parse(text)

# Access bars and their chords
for bar in music.bars:
    sys.stdout.write(" ".join(str(chord) for chord in bar.chords) + "\n")

# Export to Harte notation
sys.stdout.write(", ".join(to_harte(chord) for chord in music.chords) + "\n")

# Fixed-width chart
sys.stdout.write(str(music))
