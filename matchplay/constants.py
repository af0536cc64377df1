"""Constants for match-play scoring."""

# Holes in a regulation round
HOLES_PER_ROUND = 18

# Hole after which the margin counts as the margin entering the back nine
BACK_NINE_ENTRY = 9

# Default course par when no course document is available
DEFAULT_COURSE_PAR = 72

# Par used for a hole missing from the course document
DEFAULT_HOLE_PAR = 4

# Minimum drives each player must contribute per round (3 per nine)
MIN_DRIVES_PER_ROUND = 6

# Holes down/up on the back nine that qualify as a comeback win / blown lead
COMEBACK_THRESHOLD = 3

# Team worst-ball total minus best-ball total that earns the Jekyll & Hyde badge
JEKYLL_AND_HYDE_THRESHOLD = 24

# Plausible gross score range for a single hole (validators only)
MIN_HOLE_GROSS = 1
MAX_HOLE_GROSS = 20

# Side identifiers used in match documents
TEAM_A = 'teamA'
TEAM_B = 'teamB'
ALL_SQUARE = 'AS'

SIDES = (TEAM_A, TEAM_B)
