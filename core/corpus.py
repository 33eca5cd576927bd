"""Static word and homophone dictionary for offline play."""

from .models import Difficulty, WordChallenge
from .utils import normalize_word

# word -> (definition, example sentence), bucketed by difficulty
WORD_CORPUS = {
    Difficulty.EASY: {
        'apple': ('A round fruit with red or green skin.', 'She packed an apple for lunch.'),
        'house': ('A building where people live.', 'Their house has a red door.'),
        'water': ('The clear liquid that falls as rain.', 'Drink a glass of water every morning.'),
        'happy': ('Feeling or showing pleasure.', 'The puppy looked happy to see us.'),
        'friend': ('A person you like and trust.', 'My friend lent me a pencil.'),
        'school': ('A place where children learn.', 'We walk to school together.'),
        'green': ('The colour of fresh grass.', 'He painted the fence green.'),
        'sleep': ('To rest with your eyes closed.', 'Babies sleep for many hours a day.'),
        'table': ('A piece of furniture with a flat top and legs.', 'Put the plates on the table.'),
        'garden': ('A piece of land where plants are grown.', 'Tomatoes grow in our garden.'),
        'bread': ('Food made from flour, water and yeast.', 'Dad baked fresh bread today.'),
        'river': ('A large natural stream of water.', 'Ducks swam down the river.'),
        'knee': ('The joint in the middle of your leg.', 'She scraped her knee on the path.'),
        'lamb': ('A young sheep.', 'The lamb followed its mother.'),
        'write': ('To put letters or words on a surface.', 'Please write your name at the top.'),
        'light': ('Brightness that lets you see things.', 'Turn on the light, please.'),
        'comb': ('A tool with teeth for tidying hair.', 'He keeps a comb in his pocket.'),
        'half': ('One of two equal parts.', 'I ate half of the sandwich.'),
    },
    Difficulty.MEDIUM: {
        'bicycle': ('A vehicle with two wheels moved by pedals.', 'She rides her bicycle to the park.'),
        'library': ('A place where books are kept for people to borrow.', 'The library closes at six.'),
        'calendar': ('A chart showing the days and months of a year.', 'Mark the party on the calendar.'),
        'chocolate': ('A sweet food made from roasted cacao seeds.', 'He shared his chocolate with everyone.'),
        'kitchen': ('The room where food is cooked.', 'The kitchen smelled of cinnamon.'),
        'island': ('Land surrounded by water.', 'They sailed to a tiny island.'),
        'thumb': ('The short thick finger on the side of the hand.', 'She pressed the button with her thumb.'),
        'wrist': ('The joint between the hand and the arm.', 'She wears a watch on her wrist.'),
        'knight': ('A soldier of high rank in the Middle Ages.', 'The knight rode a white horse.'),
        'listen': ('To pay attention to a sound.', 'Listen carefully to the instructions.'),
        'castle': ('A large fortified building from long ago.', 'The castle had four tall towers.'),
        'answer': ('A reply to a question.', 'Raise your hand if you know the answer.'),
        'believe': ('To accept that something is true.', 'I believe you are right.'),
        'science': ('The study of the natural world.', 'Science is her favourite subject.'),
        'journey': ('Travel from one place to another.', 'The journey took three days.'),
        'separate': ('To move apart or divide.', 'Separate the eggs into two bowls.'),
        'surprise': ('Something unexpected.', 'The party was a complete surprise.'),
        'february': ('The second month of the year.', 'Her birthday is in February.'),
    },
    Difficulty.HARD: {
        'necessary': ('Needed or required.', 'Is it necessary to bring a coat?'),
        'rhythm': ('A regular repeated pattern of sound.', 'Clap along to the rhythm.'),
        'conscience': ('The inner sense of right and wrong.', 'His conscience told him to apologise.'),
        'restaurant': ('A place where meals are bought and eaten.', 'We ate at a new restaurant.'),
        'government': ('The group of people who run a country.', 'The government announced a new law.'),
        'environment': ('The natural world around us.', 'Recycling helps the environment.'),
        'psychology': ('The study of the mind and behaviour.', 'She studies psychology at university.'),
        'receipt': ('A piece of paper showing that something was paid for.', 'Keep the receipt in case it breaks.'),
        'doubt': ('A feeling of not being sure.', 'There is no doubt she will win.'),
        'subtle': ('Not obvious; delicate.', 'There was a subtle change in his tone.'),
        'foreign': ('From another country.', 'He speaks three foreign languages.'),
        'guarantee': ('A firm promise that something will happen.', 'The toaster has a two-year guarantee.'),
        'privilege': ('A special right given to some people.', 'It is a privilege to meet you.'),
        'occasion': ('A particular event or time.', 'A wedding is a special occasion.'),
        'embarrass': ('To make someone feel awkward.', 'Please do not embarrass me in front of my friends.'),
        'mischievous': ('Playfully causing trouble.', 'The mischievous cat hid my keys.'),
        'definitely': ('Without any doubt.', 'I will definitely be there.'),
        'solemn': ('Serious and formal.', 'The ceremony was solemn and quiet.'),
    },
    Difficulty.EXTREME: {
        'onomatopoeia': ('A word that imitates the sound it describes.', 'Buzz is an example of onomatopoeia.'),
        'conscientious': ('Careful to do things well and thoroughly.', 'She is a conscientious student.'),
        'bureaucracy': ('A system of government with many rules and officials.', 'The bureaucracy slowed the project down.'),
        'pharaoh': ('A ruler of ancient Egypt.', 'The pharaoh was buried in a pyramid.'),
        'entrepreneur': ('A person who starts a business.', 'The entrepreneur opened three shops.'),
        'silhouette': ('A dark outline against a lighter background.', 'We saw his silhouette in the doorway.'),
        'connoisseur': ('An expert judge in matters of taste.', 'He is a connoisseur of fine cheese.'),
        'liaison': ('A person who helps groups communicate.', 'She acts as liaison between the teams.'),
        'mnemonic': ('A device that helps you remember something.', 'The rhyme is a mnemonic for the planets.'),
        'pneumonia': ('A serious infection of the lungs.', 'He was in hospital with pneumonia.'),
        'psychiatrist': ('A doctor who treats mental illness.', 'The psychiatrist listened patiently.'),
        'rendezvous': ('A meeting at an agreed time and place.', 'Our rendezvous is at the old bridge.'),
        'fuchsia': ('A vivid purplish-red colour.', 'She wore a fuchsia scarf.'),
        'chrysanthemum': ('A garden flower with many petals.', 'A chrysanthemum bloomed by the gate.'),
        'idiosyncrasy': ('A habit peculiar to one person.', 'Humming while reading is his idiosyncrasy.'),
        'millennium': ('A period of one thousand years.', 'The city celebrated the new millennium.'),
        'questionnaire': ('A set of written questions.', 'Please fill in the questionnaire.'),
        'surveillance': ('Close observation of a person or place.', 'The bank is under constant surveillance.'),
    },
}

# Thematic categories layered over the difficulty buckets
CATEGORY_WORDS = {
    'silent-letter': {
        'knee', 'lamb', 'write', 'light', 'comb', 'half',
        'island', 'thumb', 'wrist', 'knight', 'listen', 'castle', 'answer',
        'psychology', 'receipt', 'doubt', 'subtle', 'foreign', 'solemn',
        'mnemonic', 'pneumonia', 'psychiatrist', 'rendezvous', 'silhouette',
    },
    'boss': {
        'onomatopoeia', 'conscientious', 'bureaucracy', 'entrepreneur', 'connoisseur',
        'liaison', 'chrysanthemum', 'idiosyncrasy', 'millennium', 'questionnaire',
        'surveillance', 'fuchsia',
    },
}

# Each entry: correct word, fill-in sentence, definition, distractors
HOMOPHONE_CORPUS = {
    Difficulty.EASY: [
        {'correct_word': 'their', 'sentence': 'The children left ___ bags by the door.',
         'definition': 'Belonging to them.', 'distractors': ['there', "they're"]},
        {'correct_word': 'know', 'sentence': 'I ___ the answer to that question.',
         'definition': 'To be aware of something.', 'distractors': ['no']},
        {'correct_word': 'two', 'sentence': 'She wants to eat ___ cookies.',
         'definition': 'The number after one.', 'distractors': ['to', 'too']},
        {'correct_word': 'here', 'sentence': 'Please sit ___ and wait.',
         'definition': 'In this place.', 'distractors': ['hear']},
        {'correct_word': 'blew', 'sentence': 'The wind ___ the leaves off the tree.',
         'definition': 'Past tense of blow.', 'distractors': ['blue']},
        {'correct_word': 'bear', 'sentence': 'We saw a ___ in the forest.',
         'definition': 'A large furry wild animal.', 'distractors': ['bare']},
        {'correct_word': 'right', 'sentence': 'Turn ___ at the end of the road.',
         'definition': 'The side opposite to left.', 'distractors': ['write', 'rite']},
    ],
    Difficulty.MEDIUM: [
        {'correct_word': 'aisle', 'sentence': 'The bride walked down the ___.',
         'definition': 'A passage between rows of seats.', 'distractors': ['isle', "I'll"]},
        {'correct_word': 'stationary', 'sentence': 'The car remained ___ at the red light.',
         'definition': 'Not moving.', 'distractors': ['stationery']},
        {'correct_word': 'piece', 'sentence': 'May I have a ___ of cake?',
         'definition': 'A portion of something.', 'distractors': ['peace']},
        {'correct_word': 'principal', 'sentence': 'The ___ of the school gave a speech.',
         'definition': 'The head of a school.', 'distractors': ['principle']},
        {'correct_word': 'mane', 'sentence': 'The horse shook its long ___.',
         'definition': "Long hair on a horse's neck.", 'distractors': ['main']},
        {'correct_word': 'through', 'sentence': 'We walked ___ the park.',
         'definition': 'From one side to the other.', 'distractors': ['threw']},
        {'correct_word': 'weather', 'sentence': 'The ___ is sunny today.',
         'definition': 'The state of the air outside.', 'distractors': ['whether']},
    ],
    Difficulty.HARD: [
        {'correct_word': 'compliment', 'sentence': 'He paid her a kind ___ on her essay.',
         'definition': 'A polite expression of praise.', 'distractors': ['complement']},
        {'correct_word': 'capitol', 'sentence': 'Lawmakers met inside the ___ building.',
         'definition': 'A building where lawmakers meet.', 'distractors': ['capital']},
        {'correct_word': 'moor', 'sentence': 'We need to ___ the boat before the storm.',
         'definition': 'To tie up a boat.', 'distractors': ['more']},
        {'correct_word': 'peak', 'sentence': 'The ___ of the mountain was covered in snow.',
         'definition': 'The pointed top of a mountain.', 'distractors': ['peek', 'pique']},
        {'correct_word': 'reins', 'sentence': 'Pull the ___ to slow the horse.',
         'definition': 'Straps used to guide a horse.', 'distractors': ['reigns', 'rains']},
        {'correct_word': 'fazed', 'sentence': 'She was not ___ by the loud crowd.',
         'definition': 'Disturbed or unsettled.', 'distractors': ['phased']},
        {'correct_word': 'cereal', 'sentence': 'I eat ___ with milk for breakfast.',
         'definition': 'A breakfast food made from grain.', 'distractors': ['serial']},
    ],
    Difficulty.EXTREME: [
        {'correct_word': 'discreet', 'sentence': 'Please be ___ about the surprise party.',
         'definition': 'Careful to keep something private.', 'distractors': ['discrete']},
        {'correct_word': 'mettle', 'sentence': "The climb tested the team's ___.",
         'definition': 'Courage and spirit.', 'distractors': ['metal', 'meddle']},
        {'correct_word': 'reign', 'sentence': "The queen's ___ lasted fifty years.",
         'definition': 'The period a monarch rules.', 'distractors': ['rain', 'rein']},
        {'correct_word': 'hoarse', 'sentence': 'After the concert her voice was ___.',
         'definition': 'Rough and deep from strain.', 'distractors': ['horse']},
        {'correct_word': 'veil', 'sentence': 'The bride lifted her lace ___.',
         'definition': 'A thin cloth worn over the face.', 'distractors': ['vale', 'vail']},
        {'correct_word': 'stationery', 'sentence': 'She ordered new ___ for the office.',
         'definition': 'Paper, envelopes and writing materials.', 'distractors': ['stationary']},
        {'correct_word': 'heal', 'sentence': 'The cut will ___ in a few days.',
         'definition': 'To become healthy again.', 'distractors': ['heel', "he'll"]},
    ],
}


class OfflineCorpus:
    """Read-only view over the bundled dictionaries."""

    def __init__(self, words: dict = None, homophones: dict = None, categories: dict = None):
        self._words = WORD_CORPUS if words is None else words
        self._homophones = HOMOPHONE_CORPUS if homophones is None else homophones
        self._categories = CATEGORY_WORDS if categories is None else categories

    def get_word_entries(self, difficulty: Difficulty, category: str | None = None) -> list[WordChallenge]:
        """Word challenges for a difficulty, optionally filtered by category."""
        items = self._words.get(difficulty, {})
        allowed = None
        if category is not None:
            allowed = self._categories.get(normalize_word(category), set())
        return [
            WordChallenge(word, definition, example)
            for word, (definition, example) in items.items()
            if allowed is None or word in allowed
        ]

    def get_homophone_entries(self, difficulty: Difficulty) -> list[dict]:
        return list(self._homophones.get(difficulty, []))

    def find_word_entry(self, word: str) -> tuple[Difficulty, WordChallenge] | None:
        key = normalize_word(word)
        for difficulty, items in self._words.items():
            if key in items:
                definition, example = items[key]
                return difficulty, WordChallenge(key, definition, example)
        return None

    def find_homophone_entry(self, word: str) -> tuple[Difficulty, dict] | None:
        key = normalize_word(word)
        for difficulty, entries in self._homophones.items():
            for entry in entries:
                if entry['correct_word'].lower() == key:
                    return difficulty, entry
        return None


default_corpus = OfflineCorpus()
