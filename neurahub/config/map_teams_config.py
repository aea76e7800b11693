"""
Map Teams Configuration
Static seed list of FTC teams shown on the public map.
Used by the map endpoints and by the seed script that fills the map_teams table.
"""

import random

# Markers sharing a city are spread by up to half this many degrees each way
JITTER_SPAN = 0.05


def _team(team_id, number, name, location, lat, lng, description, awards=None,
          website=None, logo=None, jitter=False):
    return {
        "id": team_id,
        "number": number,
        "name": name,
        "location": location,
        "description": description,
        "lat": lat,
        "lng": lng,
        "jitter": jitter,
        "awards": awards or [],
        "website": website,
        "logo": logo,
    }


MAP_TEAMS = [
    # KAZAKHSTAN
    _team("kz-1", "24697", "SANA Team", "Almaty, Kazakhstan", 43.2551, 76.9126, "Almaty BIL for boys. 3 years in FIRST; qualified for Houston 24-25.", ["Inspire", "Connect"], "instagram.com/sana_ftc", "/logos/sana.jpg", jitter=True),
    _team("kz-2", "25109", "Naizagay", "Astana, Kazakhstan", 51.1694, 71.4491, "Harmony STEAM. Team exists for about 3 years.", ["Motivate"], "instagram.com/naizagay_ftc", "/logos/naizagay.jpg", jitter=True),
    _team("kz-3", "19163", "MLP", "Almaty, Kazakhstan", 43.2551, 76.9126, "Prometheus School. 2nd year in FTC, team of 4.", ["Mentoring"], "instagram.com/mlp.ftc", "/logos/mlp.jpg", jitter=True),
    _team("kz-4", "25034", "OZGE", "Astana, Kazakhstan", 51.1694, 71.4491, "Astana Polytech. 3 years in FIRST, technically strong.", ["Innovate"], "instagram.com/ozge.ftc", "/logos/ozge.jpg", jitter=True),
    _team("kz-5", "KZ-RUMBLE", "Rumble", "Zhanaozen, Kazakhstan", 43.3409, 52.8598, "BIL. First year in FTC (previously FLL).", ["Rookie"], "instagram.com/rumble_ftc_fll", "/logos/rumble.jpg", jitter=True),
    _team("kz-6", "32535", "OYU", "Almaty, Kazakhstan", 43.2551, 76.9126, "119 Lyceum. Previously FLL, first time joined FTC.", ["Rookie"], "instagram.com/oyu.ftc", "/logos/oyu.jpg", jitter=True),
    _team("kz-7", "28836", "Zenith", "Astana, Kazakhstan", 51.1694, 71.4491, "Astana BIL. First year in FTC, confident in robot.", ["Design"], "instagram.com/zenith_ftc", "/logos/zenith.jpg", jitter=True),
    _team("kz-8", "28888", "ERRORDA", "Almaty, Kazakhstan", 43.2551, 76.9126, "Nurorda Almaty. First year in FTC, actively learning.", ["Think"], "instagram.com/errorda.ftc", "/logos/errorda.jpg", jitter=True),
    _team("kz-9", "24690", "Azumi", "Oral, Kazakhstan", 51.2333, 51.3667, "NIS Oral. First year in FTC, improving Inspire.", ["Inspire"], "instagram.com/azumi_ftc", "/logos/azumi.jpg", jitter=True),
    _team("kz-10", "33595", "Tolqyn", "Astana, Kazakhstan", 51.1694, 71.4491, "103 Comfort School. Less than 2 months old.", ["Rookie"], "instagram.com/tolqyn_ftc", "/logos/tolqyn.jpg", jitter=True),
    _team("kz-11", "29382", "Flying Penguins", "Astana, Kazakhstan", 51.1694, 71.4491, "International Steppe School. Founded in off-season 2025.", ["Connect"], "instagram.com/flyingpenguins_ftc", "/logos/flyingpenguins.jpg", jitter=True),
    _team("kz-12", "31881", "Qazaq Style Juniors", "Almaty, Kazakhstan", 43.2551, 76.9126, "School #97 & #62. Inspire Award 1st Place.", ["Inspire", "Think"], "instagram.com/qazaqstyle.juniors", "/logos/qazaqsrylejuniors.jpg", jitter=True),
    _team("kz-13", "33785", "UnionTUR", "Kazygurt, Turkestan", 41.7589, 69.4124, "Combined team from 3 schools.", ["Innovate"], "instagram.com/uniontur_ftc", "/logos/uniontur.jpg", jitter=True),
    _team("kz-14", "33527", "SunRise", "Almaty, Kazakhstan", 43.2551, 76.9126, "178 SL. New team opened this year.", ["Rookie"], "instagram.com/ftc_sunrise", "/logos/sunrise.jpg", jitter=True),
    _team("kz-15", "29029", "Foxslide", "Astana, Kazakhstan", 51.1694, 71.4491, "RFMSH Astana. Participating in DECODE season.", ["Motivate"], "instagram.com/foxslide.ftc", "/logos/foxslide.jpg", jitter=True),
    _team("kz-16", "33444", "Uly Dala", "Almaty, Kazakhstan", 43.2551, 76.9126, "Gymnasium #140. Control Award winners.", ["Control", "Inspire"], "instagram.com/ulydala.ftc", "/logos/ulydala.jpg", jitter=True),
    _team("kz-17", "33800", "Gammadive", "Almaty, Kazakhstan", 43.2551, 76.9126, "School-Gymnasium #94. One month old.", ["Design"], "instagram.com/gammadive_ftc", "/logos/gamma drive.jpg", jitter=True),
    _team("kz-18", "28473", "SlapSeals", "Astana, Kazakhstan", 51.1694, 71.4491, "Binom School. One year old, strong team spirit.", ["Motivate"], "instagram.com/slapseals_ftc", "/logos/slapseals.jpg", jitter=True),
    _team("kz-19", "25054", "IRYS", "Almaty, Kazakhstan", 43.2551, 76.9126, "KazGU Bekzat. Formed from 3 teams.", ["Connect"], "instagram.com/irys_ftc", "/logos/irys.jpg", jitter=True),
    _team("kz-20", "25547", "SPIRIT", "Astana, Kazakhstan", 51.1694, 71.4491, "Schoolchildrens Palace. 2nd season, 8 members.", ["Connect"], "instagram.com/spirit_ftc", "/logos/spirit.jpg", jitter=True),
    _team("kz-21", "33470", "Sakura", "Atyrau, Kazakhstan", 47.1127, 51.8869, "Farabi Intl & NIS. Built holonomic drive.", ["Innovate"], "instagram.com/sakura_ftc", "/logos/sakura.jpg", jitter=True),
    _team("kz-22", "27772", "JelToqSun", "Karaganda, Kazakhstan", 49.8020, 73.1021, "Murager. In FIRST since Superpowered.", ["Inspire"], "instagram.com/first.jeltoqsun", "/logos/jeltoqsan.jpg", jitter=True),
    _team("kz-23", "30326", "Future Vortex", "Almaty, Kazakhstan", 43.2551, 76.9126, "Gymnasium #97 & #218. Formed this season.", ["Think"], "instagram.com/future._vortexftckz", "/logos/futurevortex.jpg", jitter=True),
    _team("kz-24", "26602", "WATER 7", "Taldykorgan, Kazakhstan", 45.0115, 78.3770, "Zhylandy Lyceum. Second year participating in FTC.", ["Design"], "instagram.com/team.water7", "/logos/water7.jpg", jitter=True),
    _team("kz-25", "32685", "FiftyOne Teams", "Semey, Kazakhstan", 50.4111, 80.2275, "51 Keleshek School. Recently opened.", ["Design"], "instagram.com/fifty1teams_semey_ftc", "/logos/fiftyone.jpg", jitter=True),
    _team("kz-26", "21058", "Panheya", "Almaty, Kazakhstan", 43.2551, 76.9126, "NIS Almaty-Medeu. Founded by ex-Cristabol members.", ["Inspire"], "instagram.com/ftc_panheya", "/logos/panheya.jpg", jitter=True),
    _team("kz-27", "22975", "BILORDA", "Astana, Kazakhstan", 51.1694, 71.4491, "Nurorda. Team exists for 4 years.", ["Control"], "instagram.com/bilorda.ftc", "/logos/bilorda.jpg", jitter=True),
    _team("kz-28", "33033", "Espada", "Almaty, Kazakhstan", 43.2551, 76.9126, "Almaty Multidisciplinary College. Rookie team.", ["Rookie"], "instagram.com/amk_robotics", "/logos/espada.jpg", jitter=True),
    _team("kz-29", "33624", "STRIKE", "Shymkent, Kazakhstan", 42.3417, 69.5901, "NIS Karatau. New FTC team.", ["Rookie"], "instagram.com/strike_ftc", jitter=True),

    # USA (East)
    _team("1", "11115", "Gluten Free", "New Hampshire, USA", 43.1939, -71.5724, "Legendary World Championship winning team.", ["Inspire", "Winning Alliance"], "glutenfree11115.com"),
    _team("2", "18438", "Wolfpack Machina", "Beverly, MA, USA", 42.5584, -70.8800, "High-performance team.", ["Control Award"], "wolfpackmachina.com"),
    _team("3", "16633", "Don't Blink", "Plainsboro, NJ, USA", 40.3303, -74.6300, "Consistently competitive team.", ["Motivate"], "dontblinkrobotics.org"),
    _team("4", "4174", "Atomic Theory", "New York, NY, USA", 40.7128, -74.0060, "Long-standing NYC powerhouse team.", ["Connect"], "atomictheory.org"),
    _team("5", "13917", "CyberScott", "Scotland, PA, USA", 39.9550, -77.5850, "Strong innovative designs.", ["Design"], "cyberscott.org"),

    # USA (Midwest/West)
    _team("6", "8680", "Kraken-Pinion", "Mequon, WI, USA", 43.2250, -87.9890, 'Known for "Kraken" branding.', ["Innovate"], "kp-robotics.org"),
    _team("7", "7238", "Cyborg Cats", "St. Louis, MO, USA", 38.6270, -90.1994, "Documentation experts.", ["Think"], "cyborgcats.com"),
    _team("8", "11212", "The Clueless", "San Diego, CA, USA", 32.7157, -117.1611, "Top-tier California team.", ["Inspire"], "theclueless.org"),
    _team("9", "12635", "Kuriosity Robotics", "Palo Alto, CA, USA", 37.4419, -122.1430, "Silicon Valley based team.", ["Control"], "kuriosityrobotics.org"),
    _team("10", "14374", "Dark Matter", "Mandeville, LA, USA", 30.3582, -90.0656, "Strong southern team.", ["Motivate"], "darkmatterrobotics.org"),

    # International
    _team("11", "19066", "Spice", "Bucharest, Romania", 44.4268, 26.1025, "Strongest international contenders.", ["Winning Alliance"], "spicerobotics.ro"),
    _team("16", "16008", "RoboLancers", "Stuttgart, Germany", 48.7758, 9.1829, "Veteran German team.", ["Design"], "robolancers.de"),
    _team("21", "5985", "Project Bucephalus", "Wollongong, Australia", -34.4248, 150.8931, "Australia's premier team.", ["Inspire"], "projectbucephalus.org"),
    _team("26", "16378", "Pink to the Future", "Eindhoven, Netherlands", 51.4416, 5.4697, "Vibrant pink branding.", ["Connect"], "pinktothefuture.nl"),
    _team("31", "16168", "Team Elev8", "Mumbai, India", 19.0760, 72.8777, "Top contender from India.", ["Inspire"], "teamelev8.in"),
    _team("46", "13504", "Taipei American School", "Taipei, Taiwan", 25.1146, 121.5298, "Well-resourced technical team.", ["Inspire"], "tas.edu.tw"),
]


def get_map_teams(rng=None):
    """
    Return the seed teams in MapTeam shape.
    Kazakhstan teams share a handful of city coordinates, so their markers get
    a small random offset on every call.
    """
    rng = rng or random
    teams = []
    for team in MAP_TEAMS:
        lat, lng = team["lat"], team["lng"]
        if team["jitter"]:
            lat += (rng.random() - 0.5) * JITTER_SPAN
            lng += (rng.random() - 0.5) * JITTER_SPAN
        teams.append({
            "id": team["id"],
            "number": team["number"],
            "name": team["name"],
            "location": team["location"],
            "description": team["description"],
            "coordinates": {"lat": lat, "lng": lng},
            "website": team["website"],
            "awards": list(team["awards"]),
            "logo": team["logo"],
        })
    return teams
