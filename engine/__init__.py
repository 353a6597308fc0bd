from .fuzzy_match import edit_distance, fuzzy_title_match, tokenize
from .search_query import build_search_query
from .search_scoring import SearchItem, rank_search_results, score_item
from .title_normalization import normalize_characters, normalize_song_title
