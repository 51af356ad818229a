"""LetterPerk: deterministic puzzle generation and scoring for a tile word game."""
