CATEGORY_LABELS = {
    "nature": "Nature",
    "animals": "Animals",
    "objects": "Objects",
    "places": "Places",
    "people": "People",
    "body": "Body",
    "actions": "Actions",
    "elements": "Elements",
}

CATEGORY_ICONS = {
    "nature": "🌿",
    "animals": "🐾",
    "objects": "🗝",
    "places": "🏛",
    "people": "👤",
    "body": "🫀",
    "actions": "🪽",
    "elements": "🔥",
}

DAILY_SYMBOLS_INTRO = (
    "Daily Dream Symbols\n\n"
    "Each day brings a new symbol to carry into sleep. "
    "Yesterday's symbol stays visible for reflection and tomorrow's is revealed early, "
    "so you can set an intention before bed."
)

DREAM_SYMBOLS = [
    {
        "id": "butterfly",
        "name": "Butterfly",
        "icon": "🦋",
        "category": "nature",
        "short_description": "Transformation and personal growth",
        "detailed_description": (
            "Butterflies point to metamorphosis: shedding old habits and stepping into a new phase. "
            "Bright wings suggest a joyful change, a struggling butterfly hints at growth meeting resistance."
        ),
    },
    {
        "id": "flying",
        "name": "Flying",
        "icon": "🕊",
        "category": "actions",
        "short_description": "Freedom, perspective, and rising above limitations",
        "detailed_description": (
            "Flying dreams reflect how free you feel to rise above a problem. "
            "Effortless flight signals confidence, fighting to stay airborne points to doubts holding you down."
        ),
    },
    {
        "id": "teeth",
        "name": "Teeth",
        "icon": "🦷",
        "category": "body",
        "short_description": "Anxiety, appearance, and communication",
        "detailed_description": (
            "Teeth dreams are among the most common worldwide and often follow worries about image or speech. "
            "Losing teeth tends to mirror fear of embarrassment or of losing influence."
        ),
    },
    {
        "id": "water",
        "name": "Water",
        "icon": "🌊",
        "category": "elements",
        "short_description": "Emotions and the subconscious mind",
        "detailed_description": (
            "The state of the water tracks your emotional weather. "
            "Calm and clear means clarity, stormy water means turmoil, deep water means feelings not yet explored."
        ),
    },
    {
        "id": "house",
        "name": "House",
        "icon": "🏠",
        "category": "places",
        "short_description": "Self and different aspects of personality",
        "detailed_description": (
            "A house is often the dreamer's own psyche, each room a different side of life. "
            "Hidden rooms suggest untapped potential, a basement the things kept out of sight."
        ),
    },
    {
        "id": "snake",
        "name": "Snake",
        "icon": "🐍",
        "category": "animals",
        "short_description": "Transformation, healing, and hidden fears",
        "detailed_description": (
            "Snakes carry a double meaning: renewal and healing on one side, hidden threats on the other. "
            "A shedding snake marks a change already under way."
        ),
    },
    {
        "id": "door",
        "name": "Door",
        "icon": "🚪",
        "category": "objects",
        "short_description": "Opportunities, transitions, and choices",
        "detailed_description": (
            "Open doors are invitations, closed ones are possibilities that still ask for effort. "
            "A locked door points to something you are not ready or not allowed to reach yet."
        ),
    },
    {
        "id": "baby",
        "name": "Baby",
        "icon": "👶",
        "category": "people",
        "short_description": "New beginnings, vulnerability, and growth potential",
        "detailed_description": (
            "A baby stands for a fragile new project, relationship, or part of yourself. "
            "A crying baby often marks a need you have been neglecting."
        ),
    },
    {
        "id": "mountain",
        "name": "Mountain",
        "icon": "⛰",
        "category": "nature",
        "short_description": "Challenges, aspirations, and spiritual journey",
        "detailed_description": (
            "Climbing reflects progress toward a goal, the summit a wider view once it is reached. "
            "A distant peak is a long-term aspiration still on the horizon."
        ),
    },
    {
        "id": "clock",
        "name": "Clock",
        "icon": "🕰",
        "category": "objects",
        "short_description": "Time awareness, pressure, and life transitions",
        "detailed_description": (
            "Clocks surface when deadlines or life stages weigh on you. "
            "A stopped clock can be a wish to pause time, racing hands a fear of it slipping away."
        ),
    },
    {
        "id": "fire",
        "name": "Fire",
        "icon": "🔥",
        "category": "elements",
        "short_description": "Passion, transformation, and purification",
        "detailed_description": (
            "A contained fire is warmth and steady passion, a wildfire is anger or change out of control. "
            "Fire also burns away what is finished to make room for what comes next."
        ),
    },
    {
        "id": "bridge",
        "name": "Bridge",
        "icon": "🌉",
        "category": "places",
        "short_description": "Transitions, connections, and crossing difficulties",
        "detailed_description": (
            "Bridges carry you from one stage of life to the next. "
            "A shaky bridge reflects worry about the crossing, being stuck midway reflects indecision."
        ),
    },
    {
        "id": "mirror",
        "name": "Mirror",
        "icon": "🪞",
        "category": "objects",
        "short_description": "Self-image, reflection, and truth",
        "detailed_description": (
            "Mirrors show how you see yourself. A distorted reflection hints at a self-image out of step "
            "with reality, and mirrors are a classic reality check inside lucid dreams."
        ),
    },
    {
        "id": "key",
        "name": "Key",
        "icon": "🔑",
        "category": "objects",
        "short_description": "Solutions, access, and hidden knowledge",
        "detailed_description": (
            "Finding a key suggests the answer to a problem is within reach. "
            "Losing one reflects feeling shut out of an opportunity."
        ),
    },
    {
        "id": "moon",
        "name": "Moon",
        "icon": "🌙",
        "category": "nature",
        "short_description": "Intuition, cycles, and the hidden self",
        "detailed_description": (
            "The moon governs tides and rhythms, in dreams it speaks of intuition and emotional cycles. "
            "A full moon marks completion, a new moon a quiet beginning."
        ),
    },
    {
        "id": "wolf",
        "name": "Wolf",
        "icon": "🐺",
        "category": "animals",
        "short_description": "Instinct, loyalty, and the wild self",
        "detailed_description": (
            "A wolf can be a guide who trusts instinct or a threat circling your camp. "
            "A lone wolf often mirrors a wish for independence."
        ),
    },
    {
        "id": "owl",
        "name": "Owl",
        "icon": "🦉",
        "category": "animals",
        "short_description": "Wisdom, night vision, and hidden truths",
        "detailed_description": (
            "Owls see in the dark, and in dreams they point to insight about what others miss. "
            "An owl calling at you may signal a truth asking for attention."
        ),
    },
    {
        "id": "labyrinth",
        "name": "Labyrinth",
        "icon": "🌀",
        "category": "places",
        "short_description": "Confusion, searching, and the inner journey",
        "detailed_description": (
            "Wandering a labyrinth reflects a situation with no obvious way out. "
            "Reaching the center suggests a patient path to self-knowledge."
        ),
    },
    {
        "id": "falling",
        "name": "Falling",
        "icon": "🪂",
        "category": "actions",
        "short_description": "Loss of control, insecurity, and letting go",
        "detailed_description": (
            "Falling dreams appear when something in waking life feels unsupported. "
            "Landing softly suggests you can trust yourself to let go."
        ),
    },
    {
        "id": "lightning",
        "name": "Lightning",
        "icon": "⚡",
        "category": "elements",
        "short_description": "Sudden insight, shock, and awakening",
        "detailed_description": (
            "Lightning is the flash of a realization or a sudden upheaval. "
            "Being struck can mean a revelation that changes how you see things."
        ),
    },
    {
        "id": "forest",
        "name": "Forest",
        "icon": "🌲",
        "category": "nature",
        "short_description": "The unknown, growth, and the unconscious",
        "detailed_description": (
            "A forest is the uncharted part of the mind. Being lost among trees reflects uncertainty, "
            "a sunlit clearing the discovery of peace inside it."
        ),
    },
    {
        "id": "lighthouse",
        "name": "Lighthouse",
        "icon": "🗼",
        "category": "places",
        "short_description": "Guidance, hope, and safe passage",
        "detailed_description": (
            "A lighthouse is direction in a dark or stormy period. "
            "Its beam can be a mentor, a value, or your own intuition pointing the way home."
        ),
    },
    {
        "id": "phoenix",
        "name": "Phoenix",
        "icon": "🐦‍🔥",
        "category": "animals",
        "short_description": "Rebirth, resilience, and renewal",
        "detailed_description": (
            "The phoenix rises from its own ashes, the clearest image of recovering after an ending. "
            "It often appears after loss, promising a return in a new form."
        ),
    },
    {
        "id": "candle",
        "name": "Candle",
        "icon": "🕯",
        "category": "objects",
        "short_description": "Hope, focus, and the flame of life",
        "detailed_description": (
            "A steady candle is quiet faith and attention. "
            "A flame guttering in the wind suggests energy or hope running low."
        ),
    },
]

ENTRY_QUESTIONS = [
    ("description", "Describe your dream in as much detail as you remember."),
    ("did_wake_up", "Did the dream wake you up? (yes/no)"),
    ("had_negative_emotions", "Did you feel fear, sadness, or anger in it? (yes/no)"),
    ("intensity_level", "How intense was it, from 1 to 10?"),
]

STREAK_MILESTONES = [10, 21, 60, 90]

MILESTONE_INSIGHTS = {
    10: (
        "10-Day Milestone: ten mornings of journaling is the point where recall usually sharpens. "
        "Details that used to fade within minutes start to stick."
    ),
    21: (
        "21-Day Milestone: three weeks in, journaling is becoming a habit rather than an effort. "
        "Look back at your entries for symbols that keep returning."
    ),
    60: (
        "60-Day Milestone: two months of entries is enough to see your own dream signs. "
        "Use them as cues for reality checks."
    ),
    90: (
        "90-Day Milestone: Master Dreamer. Your journal is now a map of your inner landscape, "
        "and your recall is likely at its peak."
    ),
}

DREAM_FACTS = [
    "Most dreams happen during REM sleep, which returns roughly every 90 minutes and grows longer toward morning.",
    "Within five minutes of waking, about half of a dream's content is usually forgotten, which is why writing it down right away matters.",
    "Blind people dream too. Those blind from birth dream in sound, touch, and smell rather than images.",
    "During REM sleep the body is mostly paralyzed, which keeps you from acting out your dreams.",
    "Recurring dreams often track an unresolved concern and tend to fade once the waking issue is addressed.",
    "Many people report dreaming in color, but a sizable minority, especially those raised with black-and-white TV, recall grayscale dreams.",
    "External sounds like an alarm or rain are often woven into the plot of a dream instead of waking you.",
]

LUCID_LESSONS = [
    "Reality checks: several times a day, look at a clock or a line of text, look away, and read it again. In dreams it rarely stays the same.",
    "Dream signs: reread your journal and list the places, people, or oddities that repeat. Seeing one of them is your cue to ask whether you are dreaming.",
    "MILD: as you fall asleep, repeat 'Next time I dream, I will know I am dreaming' while picturing yourself becoming lucid in a recent dream.",
    "Wake back to bed: after five or six hours of sleep, stay awake for 20 minutes, think about lucidity, then go back to sleep.",
    "Stabilizing: when you become lucid, rub your hands together or touch the ground. Engaging the senses keeps the dream from fading.",
    "Morning stillness: when you wake, keep your eyes closed and stay still for a minute. Recall comes back more easily before you move.",
    "Intentions: pick one simple goal for your next lucid dream, like flying or finding a mirror, so you have a plan when lucidity arrives.",
]
