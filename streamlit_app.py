# streamlit_app.py
import streamlit as st

from lookup_tables import CUISINE_INGREDIENTS, DIETARY_RESTRICTIONS
from models import MODES, UserPreferences, default_user_preferences
from recipe_finder_agent import RecipeFinderAgent
from settings import Settings, configure_logging

# ---------------------------
# Setup
# ---------------------------

st.set_page_config(
    page_title="Pantry Matcher",
    page_icon="🍽",
    layout="centered",
)

st.markdown("""
<style>
html, body {
    background: linear-gradient(180deg, #faf4e8 0%, #f1ebdd 100%) !important;
}
.stApp { color: #354436; font-family: Georgia, 'Times New Roman', serif; }
h1, h2, h3 { color: #2f4a34; }
.recipe-card {
    background: #fffcf7;
    border-radius: 12px;
    padding: 0.75rem 0.9rem;
    margin-bottom: 0.6rem;
    border: 1px solid rgba(210,190,150,0.9);
    box-shadow: 0 3px 7px rgba(156,132,98,0.18);
}
.recipe-card-title { font-size: 1.2rem; color: #2f4a34; }
.recipe-card-meta { color: #3b5d3d; font-size: 0.9rem; }
</style>
""", unsafe_allow_html=True)

# ---------------------------
# Initialise Agent
# ---------------------------

if "finder" not in st.session_state:
    settings = Settings.load()
    configure_logging(settings.debug)
    st.session_state.finder = RecipeFinderAgent.from_settings(settings)

if "pantry" not in st.session_state:
    st.session_state.pantry = []

defaults = default_user_preferences()

# ---------------------------
# Sidebar
# ---------------------------

with st.sidebar:
    st.header("👩‍🍳 Preferences")
    cuisines = st.multiselect(
        "Cuisines",
        sorted(c.title() for c in CUISINE_INGREDIENTS),
        default=sorted(defaults.cuisines),
    )
    dietary = st.multiselect("Dietary restrictions", sorted(DIETARY_RESTRICTIONS))
    difficulties = st.multiselect("Difficulty", ["Easy", "Medium", "Hard"], default=sorted(defaults.difficulties))
    max_cook_time = st.slider("Max cook time (minutes)", 5, 120, defaults.max_cook_time, step=5)
    favorites = st.text_input("Favourite ingredients (comma separated)")
    dislikes = st.text_input("Disliked ingredients (comma separated)")
    st.markdown("---")
    mode = st.radio("Matching mode", MODES, horizontal=True,
                    help="normal: near-complete match · loose: partial overlap · surprise: shuffled, may invent a recipe")

# ---------------------------
# Pantry
# ---------------------------

st.title("🍽 What can I cook?")

pantry_text = st.text_area(
    "Your ingredients (one per line)",
    value="\n".join(st.session_state.pantry),
    height=150,
)
st.session_state.pantry = [line.strip() for line in pantry_text.splitlines() if line.strip()]

if st.button("Find recipes", disabled=not st.session_state.pantry):
    preferences = UserPreferences(
        cuisines=cuisines,
        dietary=dietary,
        difficulties=difficulties,
        max_cook_time=max_cook_time,
        favorite_ingredients=[f.strip() for f in favorites.split(",") if f.strip()],
        disliked_ingredients=[d.strip() for d in dislikes.split(",") if d.strip()],
    )
    with st.spinner("Matching recipes..."):
        result = st.session_state.finder.find_recipes(st.session_state.pantry, mode, preferences)

    if result.generated_recipe is not None:
        st.success(f"✨ Invented a new recipe for you: {result.generated_recipe.title}")

    if not result.matches:
        st.info("No recipes met this mode's bar. Try loose or surprise mode.")

    for i, m in enumerate(result.matches, 1):
        r = m.recipe
        st.markdown(
            f"""
            <div class="recipe-card">
                <div class="recipe-card-title">{i}. {r.title}</div>
                <div class="recipe-card-meta">
                    {r.cuisine} · {r.cook_time} min · {r.difficulty} · match {m.match_score:.0%}
                </div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        with st.expander("Details"):
            if r.image:
                st.image(r.image, width="stretch")
            st.write("**You have:** " + (", ".join(m.matched_ingredients) or "nothing yet"))
            if m.missing_ingredients:
                st.write("**Missing:** " + ", ".join(m.missing_ingredients))
            for s in m.substitution_suggestions:
                st.caption("🔁 " + s)
            st.markdown("**Instructions**")
            for n, step in enumerate(r.instructions, 1):
                st.write(f"{n}. {step}")
