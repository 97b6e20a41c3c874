"""
Constants configuration

API settings, content constants (advertisement copy, viral hooks and calls to
action) and reward amounts.
"""

# API settings
API_TITLE = "AutoShorts API"
API_DESCRIPTION = "Automated short-form video generation with multi-key failover and catch-up scheduling"
API_VERSION = "1.0.0"

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]

# Every AD_FREQUENCY-th video carries the sponsor scene
AD_FREQUENCY = 3
AD_SCENE_INDEX = 2
SCENES_PER_VIDEO = 4
SCENES_PER_VIDEO_WITH_AD = 5

EDU_EASY_AD_SCRIPT = """
[SCÈNE PUBLICITAIRE - À INSÉRER AU MILIEU]
Narration : "Pause ! Tu veux que ton école passe de Zéro à Héros ?"
Visuel : Un graphique de notes qui monte en flèche, style dynamique, texte "0 à Héro" à l'écran.
Narration : "Découvre EduEasy sur edueasy.net. C'est l'outil de gestion tout-en-un."
Visuel : Logo EduEasy moderne, interface d'application propre sur un téléphone.
Narration : "Notre slogan ? Zéro échec scolaire. Infos sur WhatsApp au 01 57 66 08 74 !"
Visuel : Le numéro WhatsApp 0157660874 affiché en gros avec le texte "0 échec scolaire".
"""

AD_SCENE_NARRATION = (
    "Pause ! Tu veux que ton école passe de Zéro à Héros ? "
    "Découvre EduEasy sur edueasy.net. C'est l'outil de gestion tout-en-un. "
    "Notre slogan ? Zéro échec scolaire. Infos sur WhatsApp au 01 57 66 08 74 !"
)

AD_SCENE_VISUAL_PROMPT = (
    "A school grades chart shooting upwards with the on-screen text \"0 à Héro\", "
    "then the modern EduEasy logo and a clean app interface on a phone, "
    "ending on the WhatsApp number 0157660874 in large type with the text \"0 échec scolaire\""
)

# Key facts the sponsor scene must keep, whatever the model does to the wording
AD_KEY_FACTS = ("EduEasy", "edueasy.net", "0157660874", "0 échec scolaire", "0 à Héro")

VIRAL_HOOKS = [
    "Arrête de scroller si tu veux réussir !",
    "Ce secret que les profs ne te disent pas...",
    "99% des gens se trompent sur ça.",
    "La vérité dérangeante sur ton avenir.",
    "Tu perds ton temps si tu fais ça.",
    "Regarde ça avant qu'il soit trop tard.",
    "Ton cerveau te ment, voici la preuve.",
    "Ne regarde pas ça seul le soir...",
    "Tu préfères A ou B ? Choisis vite !",
    "Cette pensée va t'empêcher de dormir.",
]

VIRAL_CTAS = [
    "Et toi, t'en penses quoi ? Dis-le en comm !",
    "Tag un pote qui a besoin de voir ça 👇",
    "Abonne-toi pour devenir plus intelligent demain.",
    "Enregistre la vidéo pour pas oublier, c'est important.",
    "Mets un 🔥 si tu valides !",
    "Dis-moi ton choix en commentaire !",
    "Envoie ça à quelqu'un qui doit savoir.",
]

# Rewards
READY_REWARD = 50
VIRAL_READY_REWARD = 75
PUBLISH_REWARD = 100
POINTS_PER_LEVEL = 100

# Coarse progress milestones (percent)
PROGRESS_CREATED = 5
PROGRESS_SCRIPT_DONE = 25
PROGRESS_AUDIO_DONE = 40
PROGRESS_VIDEO_DONE = 90
PROGRESS_READY = 100

__all__ = [
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "AD_FREQUENCY",
    "AD_SCENE_INDEX",
    "SCENES_PER_VIDEO",
    "SCENES_PER_VIDEO_WITH_AD",
    "EDU_EASY_AD_SCRIPT",
    "AD_SCENE_NARRATION",
    "AD_SCENE_VISUAL_PROMPT",
    "AD_KEY_FACTS",
    "VIRAL_HOOKS",
    "VIRAL_CTAS",
    "READY_REWARD",
    "VIRAL_READY_REWARD",
    "PUBLISH_REWARD",
    "POINTS_PER_LEVEL",
    "PROGRESS_CREATED",
    "PROGRESS_SCRIPT_DONE",
    "PROGRESS_AUDIO_DONE",
    "PROGRESS_VIDEO_DONE",
    "PROGRESS_READY",
]
